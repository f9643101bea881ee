"""Restart k8s pods that mount PVCs from a set of storage classes."""
