"""mdBook preprocessor runtime."""
__all__ = [
    "preprocessor",
]
