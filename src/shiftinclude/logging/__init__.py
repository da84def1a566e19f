"""Logging helpers for shiftinclude."""
__all__ = [
    "helpers",
]
