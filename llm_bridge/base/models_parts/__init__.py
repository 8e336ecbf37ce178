"""Canonical model parts (one public class per module)."""
