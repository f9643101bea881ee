"""CSI Restarter tests."""
