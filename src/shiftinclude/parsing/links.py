from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional

from shiftinclude.constants import ESCAPE_CHAR
from shiftinclude.core.models import Anchor, IncludeTarget, LineRange, Link, RangeOrAnchor

_LINK_RE = re.compile(
    r"""(?x)              # insignificant whitespace mode
    \\\{\{\#.*\}\}        # escaped directive
    |                     # or
    \{\{\s*               # opening braces and whitespace
    \#([a-zA-Z0-9_]+)     # directive type
    \s+                   # separating whitespace
    ([^}]+)               # target and space separated properties
    \}\}                  # closing braces
    """
)

# Line numbers accept what an unsigned integer parse accepts.
_LINE_NO_RE = re.compile(r'\+?[0-9]+')


def _parse_line_no(text: str) -> Optional[int]:
    return int(text) if _LINE_NO_RE.fullmatch(text) else None


def parse_range_or_anchor(parts: Optional[str]) -> RangeOrAnchor:
    """Interpret the text after the include path.

    ``N`` selects line N, ``N:`` from line N on, ``:M`` up to line M and
    ``N:M`` lines N through M (one-based, inclusive). A non-numeric first
    part names an anchor. Unparsable end bounds widen the range instead of
    failing, and anything after a third colon is ignored.
    """
    pieces = (parts or '').split(':', 2)
    first = pieces[0]

    value = _parse_line_no(first)
    if value is not None:
        start: Optional[int] = max(value - 1, 0)
    elif first == '':
        start = None
    else:
        return Anchor(first)

    if len(pieces) < 2:
        if start is None:
            return LineRange()
        return LineRange(start, start + 1)

    end = _parse_line_no(pieces[1])
    return LineRange(start, end)


def parse_include_path(arg: str) -> IncludeTarget:
    """Split ``PATH[:RANGE_OR_ANCHOR]`` into an `IncludeTarget`."""
    path, sep, rest = arg.partition(':')
    return IncludeTarget(path=Path(path), selection=parse_range_or_anchor(rest if sep else None))


def _link_from_match(m: re.Match[str]) -> Optional[Link]:
    typ, rest = m.group(1), m.group(2)
    if typ is not None and rest is not None:
        args = rest.split()
        if not args:
            return None
        arg = args[0]
        if typ == 'include':
            return Link(m.start(), m.end(), 'include', m.group(0), target=parse_include_path(arg))
        if typ == 'shiftinclude':
            token, _, include_arg = arg.partition(':')
            return Link(
                m.start(),
                m.end(),
                'shiftinclude',
                m.group(0),
                target=parse_include_path(include_arg),
                shift_token=token,
            )
        return None
    if m.group(0).startswith(ESCAPE_CHAR):
        return Link(m.start(), m.end(), 'escaped', m.group(0))
    return None


def find_links(contents: str) -> Iterator[Link]:
    """Yield every recognised directive in *contents*, in document order."""
    for m in _LINK_RE.finditer(contents):
        link = _link_from_match(m)
        if link is not None:
            yield link
