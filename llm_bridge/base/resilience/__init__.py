"""Resilience policies (retry)."""
