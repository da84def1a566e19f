import logging
from typing import List, Optional, Sequence

from shiftinclude.core.models import Auto, FixedLeft, FixedRight, ShiftSpec, TextBlock
from shiftinclude.logging.helpers import get_logger


def _leading_ws(line: str) -> str:
    return line[:len(line) - len(line.lstrip())]


def common_leading_ws(block: Sequence[str]) -> str:
    """Return the longest whitespace prefix shared by every non-empty line.

    Zero-length lines are skipped; whitespace-only lines take part. The
    comparison is character by character, so tabs and spaces never match
    each other.
    """
    common: Optional[str] = None
    for line in block:
        if not line:
            continue
        ws = _leading_ws(line)
        if common is None:
            common = ws
            continue
        n = 0
        for a, b in zip(common, ws):
            if a != b:
                break
            n += 1
        common = common[:n]
        if not common:
            break
    return common or ''


class LineShifter:
    """Re-indent a block of lines according to a `ShiftSpec`.

    Every method returns a new list; the input sequence is never modified.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('processing.shift')

    def apply(self, spec: ShiftSpec, block: Sequence[str]) -> TextBlock:
        if isinstance(spec, FixedRight):
            return self.shift_right(block, spec.n)
        if isinstance(spec, FixedLeft):
            return self.shift_left(block, spec.n)
        if isinstance(spec, Auto):
            return self.shift_left(block, len(common_leading_ws(block)))
        raise TypeError(f'unsupported shift spec: {spec!r}')

    @staticmethod
    def shift_right(block: Sequence[str], n: int) -> TextBlock:
        indent = ' ' * n
        return [f'{indent}{ln}' for ln in block]

    def shift_left(self, block: Sequence[str], n: int) -> TextBlock:
        """Drop the first *n* characters of each line; short lines become empty."""
        if n <= 0:
            return list(block)
        out: List[str] = []
        lossy = 0
        for ln in block:
            if ln[:n].strip():
                lossy += 1
            out.append(ln[n:])
        if lossy:
            self._log.warning('⚠  left-shifting by %d removed non-whitespace from %d line(s)', n, lossy)
        return out


def apply_shift(spec: ShiftSpec, block: Sequence[str]) -> TextBlock:
    """Functional shortcut for `LineShifter().apply`."""
    return LineShifter().apply(spec, block)
