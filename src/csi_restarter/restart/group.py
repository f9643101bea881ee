"""Group pods by namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from csi_restarter.data import ObjectPath


def group_by_namespace(paths: Iterable[ObjectPath]) -> dict[str, list[str]]:
    """Group object names by namespace, keeping input order inside each group."""

    groups: dict[str, list[str]] = {}
    for path in paths:
        groups.setdefault(path.namespace, []).append(path.name)

    return groups
