"""Tests conftest."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, Mock, patch

import pytest
import pytest_asyncio

from csi_restarter.data import ObjectPath, PodRecord, PVCRecord, Settings
from csi_restarter.k8s import close_k8s_client

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator
    from pathlib import Path

TOKEN = "s3cr3t"  # noqa: S105


def pod_body(path: ObjectPath) -> dict[str, Any]:
    """Delete response body for a pod that was removed right away."""

    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"namespace": path.namespace, "name": path.name},
    }


def status_body(status: str, message: str = "") -> dict[str, Any]:
    """Delete response body with a Status object."""

    return {
        "apiVersion": "v1",
        "kind": "Status",
        "status": status,
        "message": message,
    }


class FakeCluster:
    """In memory `ClusterApi`."""

    def __init__(
        self,
        pvcs: list[PVCRecord] | None = None,
        pods: list[PodRecord] | None = None,
        responses: dict[ObjectPath, dict[str, Any] | Exception] | None = None,
    ) -> None:
        self.pvcs = pvcs or []
        self.pods = pods or []
        self.responses = responses or {}
        self.calls: list[str] = []
        self.deletes: list[tuple[ObjectPath, bool]] = []
        self.list_error: Exception | None = None

    async def list_pvcs(self) -> list[PVCRecord]:
        self.calls.append("list_pvcs")
        if self.list_error:
            raise self.list_error
        return list(self.pvcs)

    async def list_running_pods(self) -> list[PodRecord]:
        self.calls.append("list_running_pods")
        return [p for p in self.pods if p.phase == "Running"]

    async def delete_namespaced_pod(
        self, *, name: str, namespace: str, dry_run: bool
    ) -> dict[str, Any]:
        path = ObjectPath(namespace=namespace, name=name)
        self.calls.append(f"delete {path}")
        self.deletes.append((path, dry_run))
        response = self.responses.get(path, pod_body(path))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from local config files and `RESTARTER_*` variables."""

    monkeypatch.chdir(tmp_path)
    for name in [
        "BEARER_TOKEN",
        "STORAGE_CLASS",
        "BIND_ADDRESS",
        "DELETE_UNCONTROLLED",
        "DRY_RUN",
        "CONFIG_FILE",
        "LOG_FORMAT",
        "LOG_LEVEL",
        "LOG_CONFIG",
    ]:
        monkeypatch.delenv(f"RESTARTER_{name}", raising=False)


@pytest.fixture
def settings() -> Settings:
    """Settings with a single configured storage class."""

    return Settings(bearer_token=TOKEN, storage_class=["fast-ssd"])


@pytest.fixture
def cluster() -> FakeCluster:
    """Cluster from the restart scenarios."""

    return FakeCluster(
        pvcs=[
            PVCRecord("ns1", "data-a", "fast-ssd"),
            PVCRecord("ns1", "data-b", "slow-hdd"),
            PVCRecord("ns2", "data-c", "fast-ssd"),
            PVCRecord("ns3", "data-d", "fast-ssd"),
        ],
        pods=[
            PodRecord("ns1", "web-0", "Running", ("ReplicaSet/web",), ("data-a",)),
            PodRecord("ns1", "batch-0", "Running", ("Job/batch",), ("data-b",)),
            PodRecord("ns2", "cronjob-xyz", "Running", (), ("data-c",)),
            PodRecord("ns3", "db-0", "Running", ("StatefulSet/db",), (None, "data-d")),
        ],
    )


@pytest_asyncio.fixture(autouse=True)
async def cleanup_client() -> AsyncGenerator[None]:
    """Cleanup k8s client."""

    yield

    await close_k8s_client()


@pytest_asyncio.fixture(name="k8s_client")
async def k8s_client_fixture() -> AsyncGenerator[Mock]:
    """k8s client fixture."""

    with (
        patch("csi_restarter.k8s.client.config") as mock_config,
        patch("csi_restarter.k8s.client.ApiClient") as mock_klass,
    ):
        mock_config.load_kube_config = AsyncMock()

        mock_client = Mock()
        mock_client.close = AsyncMock()
        mock_client.rest_client.pool_manager.closed = False
        mock_klass.return_value = mock_client

        yield mock_client


@pytest_asyncio.fixture(name="k8s_v1_client")
async def k8s_v1_client_fixture(k8s_client: Mock) -> AsyncGenerator[Mock]:  # noqa: ARG001
    """k8s core v1 client fixture."""

    with patch("csi_restarter.k8s.client.client") as mock_v1_klass:
        mock_v1_client = Mock()
        mock_v1_client.list_persistent_volume_claim_for_all_namespaces = AsyncMock()
        mock_v1_client.list_pod_for_all_namespaces = AsyncMock()
        mock_v1_client.delete_namespaced_pod = AsyncMock()

        mock_v1_klass.CoreV1Api.return_value = mock_v1_client

        yield mock_v1_client


@pytest.fixture
def mock_run_pass() -> Generator[AsyncMock, None, None]:
    """Patch deletion pass used by the HTTP trigger."""

    with patch("csi_restarter.web.run_deletion_pass", new_callable=AsyncMock) as mock:
        yield mock
