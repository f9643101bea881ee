"""Test CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest
from kubernetes_asyncio.config import ConfigException

from csi_restarter.cli import app
from csi_restarter.cli.context import CoreContext, set_context
from csi_restarter.cli.restart import run, serve, show_config
from csi_restarter.data import ObjectPath
from csi_restarter.exceptions import ClusterQueryError
from tests.conftest import TOKEN, FakeCluster

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _core_context() -> Generator[None, None, None]:
    set_context("core", CoreContext(logging_format="rich", logging_level="INFO"))

    yield

    set_context("core", None)


@pytest.fixture
def _settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTARTER_BEARER_TOKEN", TOKEN)
    monkeypatch.setenv("RESTARTER_STORAGE_CLASS", "fast-ssd")
    monkeypatch.setenv("RESTARTER_BIND_ADDRESS", "127.0.0.1:8080")


@pytest.mark.usefixtures("_settings_env")
def test_show_config(capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing settings masks the token."""

    assert show_config() == 0

    out = capsys.readouterr().out
    assert "fast-ssd" in out
    assert "127.0.0.1:8080" in out
    assert TOKEN not in out


def test_show_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test config file from context is used."""

    config = tmp_path / "restarter.json"
    config.write_text(f'{{"bearer_token": "{TOKEN}", "storage_class": ["longhorn"]}}')
    set_context(
        "core",
        CoreContext(logging_format="rich", logging_level="INFO", config_file=config),
    )

    assert show_config() == 0
    assert "longhorn" in capsys.readouterr().out


def test_show_config_invalid(caplog: pytest.LogCaptureFixture) -> None:
    """Test invalid settings exit with an error."""

    with caplog.at_level(logging.ERROR):
        assert show_config() == 1

    assert "Invalid settings" in caplog.text


@pytest.mark.usefixtures("_settings_env")
def test_run(cluster: FakeCluster, capsys: pytest.CaptureFixture[str]) -> None:
    """Test running a single pass."""

    with patch("csi_restarter.cli.restart.KubernetesCluster", return_value=cluster):
        assert run(dry_run=True) == 0

    assert cluster.deletes == [
        (ObjectPath("ns1", "web-0"), True),
        (ObjectPath("ns3", "db-0"), True),
    ]
    out = capsys.readouterr().out
    assert "Matched 3 PVCs and 2 pods" in out
    assert "web-0" in out
    assert "dry run" in out


@pytest.mark.usefixtures("_settings_env")
def test_run_error(cluster: FakeCluster, caplog: pytest.LogCaptureFixture) -> None:
    """Test failed pass exits with an error."""

    cluster.list_error = ClusterQueryError("boom")

    with (
        patch("csi_restarter.cli.restart.KubernetesCluster", return_value=cluster),
        caplog.at_level(logging.ERROR),
    ):
        assert run() == 1

    assert "Deletion pass failed" in caplog.text


@pytest.mark.usefixtures("_settings_env")
def test_run_no_kubeconfig(caplog: pytest.LogCaptureFixture) -> None:
    """Test missing cluster credentials exits with an error."""

    with (
        patch("csi_restarter.k8s.client.config") as mock_config,
        caplog.at_level(logging.ERROR),
    ):
        mock_config.load_incluster_config.side_effect = ConfigException("no cluster")
        mock_config.load_kube_config = AsyncMock(
            side_effect=ConfigException("no kubeconfig")
        )

        assert run() == 1

    assert "Deletion pass failed" in caplog.text


@pytest.mark.usefixtures("_settings_env")
def test_serve() -> None:
    """Test serving HTTP trigger."""

    with patch("csi_restarter.cli.restart.uvicorn") as mock_uvicorn:
        assert serve() == 0

    mock_uvicorn.run.assert_called_once()
    kwargs = mock_uvicorn.run.call_args.kwargs
    assert kwargs == {"host": "127.0.0.1", "port": 8080, "log_config": None}


def test_serve_invalid() -> None:
    """Test serve does not start with invalid settings."""

    with patch("csi_restarter.cli.restart.uvicorn") as mock_uvicorn:
        assert serve() == 1

    mock_uvicorn.run.assert_not_called()


@pytest.mark.usefixtures("_settings_env")
def test_meta() -> None:
    """Test global options are applied before running the command."""

    with patch("csi_restarter.cli.core.init_logging") as mock_init:
        assert app.meta(["--logging-level", "DEBUG", "config"]) == 0

    mock_init.assert_called_once()
    assert mock_init.call_args.args[:2] == ("auto", "DEBUG")
