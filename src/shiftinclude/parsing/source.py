from __future__ import annotations
"""Directive source model.

Carries the origin of a directive (chapter file, line, column) so that
failures can be reported at the place the author has to fix them. It is
used only for log and error messages and never alters rendered output.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DirectiveSource:
    """Represents the origin of a directive.

    Attributes:
        path: Chapter path (relative to the book source dir) if known.
        line: 1-based line number in the source.
        col:  1-based column number in the source line.
    """
    path: Optional[Path] = None
    line: Optional[int] = None
    col: Optional[int] = None

    def format(self) -> str:
        """Return a human-readable source label."""
        parts: list[str] = []
        if self.path:
            parts.append(str(self.path))
        if self.line is not None:
            parts.append(f"line {self.line}")
        if self.col is not None:
            parts.append(f"col {self.col}")
        return ":".join(parts) if parts else "<unknown>"

    def with_line_col(self, line: int, col: int | None = None) -> "DirectiveSource":
        """Return a copy with given line/col updated."""
        return DirectiveSource(path=self.path, line=line, col=col)

    def at_offset(self, content: str, offset: int) -> "DirectiveSource":
        """Return a copy pointing at character *offset* of *content*."""
        line = content.count("\n", 0, offset) + 1
        col = offset - (content.rfind("\n", 0, offset) + 1) + 1
        return self.with_line_col(line, col)
