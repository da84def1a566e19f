from __future__ import annotations

from shiftinclude.constants import NAME
from shiftinclude.core.models import Auto, FixedLeft, FixedRight, ShiftSpec, TextBlock
from shiftinclude.parsing.shift import InvalidShiftToken, ShiftSpecParser, parse_shift
from shiftinclude.processing.line_shift import LineShifter, apply_shift, common_leading_ws

__version__ = '0.1.0'

# Short aliases matching the two core operations.
parse = parse_shift
apply = apply_shift

__all__ = [
    'NAME',
    'Auto',
    'FixedLeft',
    'FixedRight',
    'ShiftSpec',
    'TextBlock',
    'InvalidShiftToken',
    'ShiftSpecParser',
    'LineShifter',
    'parse',
    'parse_shift',
    'apply',
    'apply_shift',
    'common_leading_ws',
]
