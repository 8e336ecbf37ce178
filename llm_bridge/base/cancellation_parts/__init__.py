"""Cancellation implementation modules."""
