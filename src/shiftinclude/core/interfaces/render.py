from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from shiftinclude.core.models import Link


@runtime_checkable
class LinkRendererProtocol(Protocol):
    """Renders include directives and substitutes them into chapter text."""

    def render(self, link: Link, base: Path) -> str:
        """Return the replacement text for a single directive."""
        ...

    def replace_all(self, content: str, base: Path, source: Path, depth: int = 0) -> str:
        """Substitute every directive in `content`, isolating per-directive failures."""
        ...
