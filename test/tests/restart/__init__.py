"""Test restart."""
