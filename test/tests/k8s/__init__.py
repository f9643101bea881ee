"""Test k8s."""
