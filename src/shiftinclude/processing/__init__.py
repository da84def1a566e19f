"""Public API surface for shiftinclude.processing."""
__all__ = [
    "line_ops",
    "line_shift",
]
