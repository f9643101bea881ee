"""CSI Restarter CLI."""

from csi_restarter.cli.core import app

__all__ = ["app"]
