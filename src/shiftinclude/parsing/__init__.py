"""Directive and shift-token parsing."""
__all__ = [
    "links",
    "shift",
    "source",
]
