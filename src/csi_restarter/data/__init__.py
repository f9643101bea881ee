"""CSI Restarter data."""

from csi_restarter.data.models import (
    DEFAULT_BIND_ADDRESS,
    Settings,
    find_config_file,
    load_settings,
)
from csi_restarter.data.types import (
    DeletionOutcome,
    ObjectPath,
    PassSummary,
    PodRecord,
    PVCRecord,
)

__all__ = [
    "DEFAULT_BIND_ADDRESS",
    "DeletionOutcome",
    "ObjectPath",
    "PVCRecord",
    "PassSummary",
    "PodRecord",
    "Settings",
    "find_config_file",
    "load_settings",
]
