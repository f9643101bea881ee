"""CSI Restarter exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from csi_restarter.data import ObjectPath


class RestarterError(RuntimeError):
    """Base exception for a failed deletion pass."""


class ClusterQueryError(RestarterError):
    """Listing PVCs or pods from the cluster failed."""


class ClusterDeleteError(RestarterError):
    """Delete request for a pod failed."""

    def __init__(self, msg: str, *, path: ObjectPath) -> None:
        super().__init__(msg)
        self.path = path


class ConfigurationError(RuntimeError):
    """Missing or invalid setting."""


class AuthenticationError(RuntimeError):
    """Missing or incorrect bearer token."""
