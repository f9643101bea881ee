"""Pod restart pass."""

from csi_restarter.restart.delete import classify_delete_response, delete_all
from csi_restarter.restart.group import group_by_namespace
from csi_restarter.restart.runner import run_deletion_pass
from csi_restarter.restart.selection import get_qualifying_paths, select_targets

__all__ = [
    "classify_delete_response",
    "delete_all",
    "get_qualifying_paths",
    "group_by_namespace",
    "run_deletion_pass",
    "select_targets",
]
