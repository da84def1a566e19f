from __future__ import annotations
"""Shift and line-extraction protocol definitions."""

from typing import Protocol, Sequence

from shiftinclude.core.models import LineRange, ShiftSpec, TextBlock


class ShiftParserProtocol(Protocol):
    """Protocol for shift-token parsers.

    Implementations turn the token between the directive name and the first
    colon (``auto``, ``4``, ``-2``) into a `ShiftSpec`, raising
    `InvalidShiftToken` for anything else.
    """

    def parse(self, spec_text: str) -> ShiftSpec:
        ...


class LineShifterProtocol(Protocol):
    """Protocol for applying a `ShiftSpec` to a block of lines.

    Implementations must be total: no input combination raises.
    """

    def apply(self, spec: ShiftSpec, block: Sequence[str]) -> TextBlock:
        ...


class LineExtractorProtocol(Protocol):
    """Protocol for selecting the lines an include directive refers to."""

    def take_lines(self, text: str, rng: LineRange) -> TextBlock:
        ...

    def take_anchored_lines(self, text: str, anchor: str) -> TextBlock:
        ...
