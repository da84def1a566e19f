from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Literal, Mapping, Optional, Union

from shiftinclude.constants import MAX_LINK_NESTED_DEPTH

# An ordered block of lines, each without its trailing newline.
TextBlock = List[str]


@dataclass(frozen=True)
class FixedRight:
    """Prepend ``n`` spaces to every line."""
    n: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.n, int) or self.n < 0:
            raise ValueError(f'FixedRight expects a non-negative int, got {self.n!r}')


@dataclass(frozen=True)
class FixedLeft:
    """Remove the first ``n`` characters of every line (clamped)."""
    n: int

    def __post_init__(self) -> None:
        if not isinstance(self.n, int) or self.n <= 0:
            raise ValueError(f'FixedLeft expects a positive int, got {self.n!r}')


@dataclass(frozen=True)
class Auto:
    """Strip the whitespace prefix shared by every non-empty line."""


ShiftSpec = Union[FixedRight, FixedLeft, Auto]


@dataclass(frozen=True)
class LineRange:
    """Zero-based, half-open line range; ``None`` leaves a side unbounded."""
    start: Optional[int] = None
    end: Optional[int] = None


@dataclass(frozen=True)
class Anchor:
    """Named region delimited by ``ANCHOR: name`` / ``ANCHOR_END: name``."""
    name: str


RangeOrAnchor = Union[LineRange, Anchor]


@dataclass(frozen=True)
class IncludeTarget:
    path: Path
    selection: RangeOrAnchor = field(default_factory=LineRange)


LinkKind = Literal['escaped', 'include', 'shiftinclude']


@dataclass(frozen=True)
class Link:
    """A directive occurrence found in chapter text.

    Attributes:
        start: Offset of the first character of the directive.
        end: Offset just past the closing braces.
        kind: ``'escaped'``, ``'include'`` or ``'shiftinclude'``.
        text: The directive exactly as written.
        target: File and line selection; ``None`` for escaped directives.
        shift_token: Raw shift token of a ``shiftinclude`` directive. It is
            parsed at render time so a bad token fails only that directive.
    """
    start: int
    end: int
    kind: LinkKind
    text: str
    target: Optional[IncludeTarget] = None
    shift_token: Optional[str] = None


@dataclass(frozen=True)
class PreprocessorConfig:
    """Settings read from the ``[preprocessor.shiftinclude]`` table of book.toml."""
    max_depth: int = MAX_LINK_NESTED_DEPTH

    @classmethod
    def from_table(
        cls,
        table: Optional[Mapping[str, Any]],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> 'PreprocessorConfig':
        """Build a config from the raw table, falling back to defaults on bad values."""
        log = logger or logging.getLogger('shiftinclude.config')
        if not table:
            return cls()
        raw = table.get('max-depth', MAX_LINK_NESTED_DEPTH)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            log.warning('⚠  invalid max-depth %r in book.toml, using %d', raw, MAX_LINK_NESTED_DEPTH)
            raw = MAX_LINK_NESTED_DEPTH
        return cls(max_depth=raw)
