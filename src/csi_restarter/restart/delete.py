"""Delete selected pods."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from csi_restarter.data import DeletionOutcome, ObjectPath

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from csi_restarter.k8s import ClusterApi

STATUS_KIND = "Status"
STATUS_FAILURE = "Failure"
_LOGGER = logging.getLogger(__name__)


def classify_delete_response(body: Mapping[str, Any]) -> DeletionOutcome:
    """
    Classify pod delete response body.

    The API either returns the pod object (deletion accepted) or a `Status`
    object. A `Status` is only a failure if its `status` field says so.
    """

    if body.get("kind") != STATUS_KIND:
        return DeletionOutcome.DELETED

    if body.get("status") == STATUS_FAILURE:
        return DeletionOutcome.NOT_CONFIRMED

    return DeletionOutcome.TERMINATING


async def delete_all(
    cluster: ClusterApi,
    groups: Mapping[str, Sequence[str]],
    *,
    dry_run: bool,
) -> dict[ObjectPath, DeletionOutcome]:
    """
    Delete pods one namespace at a time.

    Failure statuses are logged and do not stop the pass. Any `ClusterDeleteError`
    is raised as-is and no further pods are deleted.
    """

    outcomes: dict[ObjectPath, DeletionOutcome] = {}
    for namespace, names in groups.items():
        for name in names:
            path = ObjectPath(namespace=namespace, name=name)
            body = await cluster.delete_namespaced_pod(
                name=name, namespace=namespace, dry_run=dry_run
            )
            outcome = classify_delete_response(body)
            if outcome == DeletionOutcome.NOT_CONFIRMED:
                _LOGGER.warning(
                    "Failed to delete %s: %s", path, body.get("message") or body
                )
            else:
                _LOGGER.debug("Deleted %s (%s)", path, outcome)
            outcomes[path] = outcome

    return outcomes
