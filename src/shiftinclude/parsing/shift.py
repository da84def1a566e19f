from __future__ import annotations

import logging
import re
from typing import Optional

from shiftinclude.constants import AUTO_TOKEN
from shiftinclude.core.models import Auto, FixedLeft, FixedRight, ShiftSpec
from shiftinclude.logging.helpers import get_logger

_INT_RE = re.compile(r'[+-]?[0-9]+')


class InvalidShiftToken(ValueError):
    """Raised when a shift token is neither ``auto`` nor a signed integer."""

    def __init__(self, token: str) -> None:
        super().__init__(f'invalid shift token {token!r}: expected "auto" or a signed integer')
        self.token = token


class ShiftSpecParser:
    """Parse the shift token of a ``shiftinclude`` directive.

    The token is the text between the directive name and the first colon,
    already stripped of that colon by the caller.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('parsing.shift')

    def parse(self, spec_text: str) -> ShiftSpec:
        if spec_text == AUTO_TOKEN:
            return Auto()
        # int() would also accept whitespace, underscores and non-ASCII digits.
        if not _INT_RE.fullmatch(spec_text):
            self._log.debug('rejecting shift token %r', spec_text)
            raise InvalidShiftToken(spec_text)
        value = int(spec_text)
        if value < 0:
            return FixedLeft(-value)
        return FixedRight(value)


def parse_shift(spec_text: str) -> ShiftSpec:
    """Functional shortcut for `ShiftSpecParser().parse`."""
    return ShiftSpecParser().parse(spec_text)
