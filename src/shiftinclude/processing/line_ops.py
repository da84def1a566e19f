# src/shiftinclude/processing/line_ops.py
import logging
import re
from typing import List, Optional, Pattern

from shiftinclude.core.models import LineRange, TextBlock
from shiftinclude.logging.helpers import get_logger

ANCHOR_START_RE: Pattern[str] = re.compile(r'ANCHOR:\s*(?P<anchor_name>[\w_-]+)')
ANCHOR_END_RE: Pattern[str] = re.compile(r'ANCHOR_END:\s*(?P<anchor_name>[\w_-]+)')


def split_lines(text: str) -> TextBlock:
    """Split *text* on ``\\n``, dropping one ``\\r`` per line and no final empty line."""
    if not text:
        return []
    lines = text.split('\n')
    if text.endswith('\n'):
        lines.pop()
    return [ln[:-1] if ln.endswith('\r') else ln for ln in lines]


class LineExtractor:
    """Select the lines an include directive refers to.

    Ranges are zero-based and half-open; anchors follow the mdBook
    ``ANCHOR:`` / ``ANCHOR_END:`` comment convention.
    """

    def __init__(
        self,
        *,
        anchor_start_re: Pattern[str] = ANCHOR_START_RE,
        anchor_end_re: Pattern[str] = ANCHOR_END_RE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._start_re = anchor_start_re
        self._end_re = anchor_end_re
        self._log = logger or get_logger('processing.lineops')

    def take_lines(self, text: str, rng: LineRange) -> TextBlock:
        """Return the lines of *text* covered by *rng*; empty when the range is inverted."""
        raw = split_lines(text)
        start = rng.start or 0
        end = len(raw) if rng.end is None else rng.end
        return raw[start:end]

    def take_anchored_lines(self, text: str, anchor: str) -> TextBlock:
        """Return the lines between ``ANCHOR: anchor`` and ``ANCHOR_END: anchor``.

        Marker lines of any anchor are dropped from the result, so nested
        anchors do not leak into the output. A missing start marker yields
        an empty block; a missing end marker extends to the end of *text*.
        """
        out: List[str] = []
        found = False
        for ln in split_lines(text):
            if not found:
                m = self._start_re.search(ln)
                if m and m.group('anchor_name') == anchor:
                    found = True
                continue
            m = self._end_re.search(ln)
            if m:
                if m.group('anchor_name') == anchor:
                    break
                continue
            if not self._start_re.search(ln):
                out.append(ln)
        if not found:
            self._log.debug('anchor %r not found', anchor)
        return out
