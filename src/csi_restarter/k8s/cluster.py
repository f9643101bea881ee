"""K8s resource listing and pod deletion."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Protocol

from csi_restarter.data import ObjectPath, PodRecord, PVCRecord
from csi_restarter.exceptions import ClusterDeleteError, ClusterQueryError
from csi_restarter.k8s.client import get_v1_client

if TYPE_CHECKING:
    from kubernetes_asyncio.client import V1PersistentVolumeClaim, V1Pod

RUNNING_SELECTOR = "status.phase==Running"
ERROR_LIST_PVCS = "Failed to list PVCs"
ERROR_LIST_PODS = "Failed to list running pods"
ERROR_DELETE_POD = "Failed to delete pod {path}"
ERROR_DELETE_STATUS = "Failed to delete pod {path}: HTTP {status} {body}"
_LOGGER = logging.getLogger(__name__)


class ClusterApi(Protocol):
    """Cluster operations needed for a deletion pass."""

    async def list_pvcs(self) -> list[PVCRecord]:
        """List PVCs in all namespaces."""

    async def list_running_pods(self) -> list[PodRecord]:
        """List running pods in all namespaces."""

    async def delete_namespaced_pod(
        self, *, name: str, namespace: str, dry_run: bool
    ) -> dict[str, Any]:
        """Delete pod, returning the decoded response body."""


def pvc_to_record(pvc: V1PersistentVolumeClaim) -> PVCRecord | None:
    """Convert k8s PVC to record, `None` if required metadata is missing."""

    metadata = pvc.metadata
    if not metadata or not metadata.namespace or not metadata.name:
        return None

    storage_class = pvc.spec.storage_class_name if pvc.spec else None
    return PVCRecord(
        namespace=metadata.namespace,
        name=metadata.name,
        storage_class_name=storage_class,
    )


def pod_to_record(pod: V1Pod) -> PodRecord | None:
    """Convert k8s pod to record, `None` if required metadata is missing."""

    metadata = pod.metadata
    if not metadata or not metadata.namespace or not metadata.name:
        return None

    owners = tuple(f"{o.kind}/{o.name}" for o in metadata.owner_references or [])
    volumes = (pod.spec.volumes if pod.spec else None) or []
    claims = tuple(
        v.persistent_volume_claim.claim_name if v.persistent_volume_claim else None
        for v in volumes
    )
    return PodRecord(
        namespace=metadata.namespace,
        name=metadata.name,
        phase=pod.status.phase if pod.status else None,
        owner_references=owners,
        claim_names=claims,
    )


class KubernetesCluster:
    """`ClusterApi` backed by the k8s core v1 API."""

    async def list_pvcs(self) -> list[PVCRecord]:
        """List PVCs in all namespaces."""

        try:
            v1 = await get_v1_client()
            pvcs = await v1.list_persistent_volume_claim_for_all_namespaces()
        except Exception as ex:
            raise ClusterQueryError(ERROR_LIST_PVCS) from ex

        records = []
        for pvc in pvcs.items or []:
            if (record := pvc_to_record(pvc)) is None:
                _LOGGER.debug("Skipping PVC with missing metadata: %s", pvc.metadata)
                continue
            records.append(record)

        return records

    async def list_running_pods(self) -> list[PodRecord]:
        """List running pods in all namespaces."""

        try:
            v1 = await get_v1_client()
            pods = await v1.list_pod_for_all_namespaces(
                field_selector=RUNNING_SELECTOR
            )
        except Exception as ex:
            raise ClusterQueryError(ERROR_LIST_PODS) from ex

        records = []
        for pod in pods.items or []:
            if (record := pod_to_record(pod)) is None:
                _LOGGER.debug("Skipping pod with missing metadata: %s", pod.metadata)
                continue
            records.append(record)

        return records

    async def delete_namespaced_pod(
        self, *, name: str, namespace: str, dry_run: bool
    ) -> dict[str, Any]:
        """
        Delete pod, returning the decoded response body.

        The API responds with either the deleted Pod object or a Status object, so
        the raw response is decoded instead of deserializing into `V1Pod`.
        """

        path = ObjectPath(namespace=namespace, name=name)
        kwargs: dict[str, Any] = {}
        if dry_run:
            kwargs["dry_run"] = "All"

        try:
            v1 = await get_v1_client()
            response = await v1.delete_namespaced_pod(
                name=name, namespace=namespace, _preload_content=False, **kwargs
            )
        except Exception as ex:
            raise ClusterDeleteError(
                ERROR_DELETE_POD.format(path=path), path=path
            ) from ex

        failed = response.status >= HTTPStatus.MULTIPLE_CHOICES
        try:
            data: dict[str, Any] = {} if failed else await response.json()
            body = await response.text() if failed else ""
        except Exception as ex:
            raise ClusterDeleteError(
                ERROR_DELETE_POD.format(path=path), path=path
            ) from ex
        finally:
            response.release()

        if failed:
            raise ClusterDeleteError(
                ERROR_DELETE_STATUS.format(
                    path=path, status=response.status, body=body
                ),
                path=path,
            )

        return data
