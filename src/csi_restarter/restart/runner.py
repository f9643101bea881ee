"""Run a deletion pass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from csi_restarter.data import PassSummary
from csi_restarter.restart.delete import delete_all
from csi_restarter.restart.group import group_by_namespace
from csi_restarter.restart.selection import get_qualifying_paths, select_targets

if TYPE_CHECKING:
    from csi_restarter.data import Settings
    from csi_restarter.k8s import ClusterApi

_LOGGER = logging.getLogger(__name__)


async def run_deletion_pass(settings: Settings, cluster: ClusterApi) -> PassSummary:
    """
    Delete every running pod that mounts a PVC from the configured storage classes.

    Raises `ClusterQueryError` if listing fails and `ClusterDeleteError` on the
    first delete request that fails.
    """

    storage_classes = list(settings.storage_class)
    summary = PassSummary(storage_classes=storage_classes, dry_run=settings.dry_run)
    _LOGGER.info(
        "Querying for pods that use PVCs with one of these storage classes: %s",
        storage_classes,
    )

    pvcs = await cluster.list_pvcs()
    pods = await cluster.list_running_pods()
    summary.matched_pvcs = len(get_qualifying_paths(pvcs, storage_classes))
    summary.selected_pods = select_targets(
        pvcs,
        pods,
        storage_classes,
        allow_uncontrolled=settings.delete_uncontrolled,
    )

    groups = group_by_namespace(summary.selected_pods)
    _LOGGER.debug("Pods that use previously found PVCs: %s", groups)

    summary.outcomes = await delete_all(cluster, groups, dry_run=settings.dry_run)
    if summary.not_confirmed:
        _LOGGER.warning(
            "Deletion not confirmed for %s pods", len(summary.not_confirmed)
        )
    _LOGGER.info(
        "Pods deletion initiated successfully%s",
        " (dry run)" if summary.dry_run else "",
    )
    return summary
