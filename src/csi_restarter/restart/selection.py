"""Select pods that mount PVCs from a set of storage classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from csi_restarter.data import ObjectPath

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from csi_restarter.data import PodRecord, PVCRecord

RUNNING_PHASE = "Running"
_LOGGER = logging.getLogger(__name__)


def get_qualifying_paths(
    pvcs: Iterable[PVCRecord], storage_classes: Collection[str]
) -> set[str]:
    """Get `namespace/name` of every PVC that uses one of the storage classes."""

    return {
        pvc.path
        for pvc in pvcs
        if pvc.storage_class_name is not None
        and pvc.storage_class_name in storage_classes
    }


def _mounts_any(pod: PodRecord, paths: set[str]) -> bool:
    return any(f"{pod.namespace}/{c}" in paths for c in pod.claim_names if c)


def select_targets(
    pvcs: Iterable[PVCRecord],
    pods: Iterable[PodRecord],
    storage_classes: Collection[str],
    *,
    allow_uncontrolled: bool = False,
) -> list[ObjectPath]:
    """
    Select running pods that mount a PVC from one of the storage classes.

    Pods without owner references are skipped unless `allow_uncontrolled` is set
    since nothing would recreate them after they are deleted. Each pod is returned
    at most once, no matter how many matching PVCs it mounts.
    """

    paths = get_qualifying_paths(pvcs, storage_classes)
    _LOGGER.info(
        "Found %s PVCs that use one of these storage classes: %s",
        len(paths),
        list(storage_classes),
    )
    _LOGGER.debug("PVCs that use wanted storage class: %s", sorted(paths))

    selected: list[ObjectPath] = []
    for pod in pods:
        if pod.phase != RUNNING_PHASE:
            continue
        if not pod.owner_references and not allow_uncontrolled:
            _LOGGER.debug("Skipping uncontrolled pod %s", pod.path)
            continue
        if _mounts_any(pod, paths):
            selected.append(pod.path)

    _LOGGER.info("Found %s pods that use previously found PVCs", len(selected))
    return selected
