"""Directive rendering for shiftinclude."""
__all__ = [
    "renderer",
]
