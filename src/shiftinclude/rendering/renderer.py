"""
Link renderer for shiftinclude.

This module provides:
  • IncludeError  – raised when an included file cannot be read.
  • LinkRenderer  – renders single directives and substitutes every
                    directive found in a chapter.

Notes
-----
• Shift tokens are parsed lazily in `render`, so a malformed token fails
  only its own directive.
• `replace_all` never raises for a bad directive: the failure is logged
  with its chapter location and the raw directive text is kept in place.
• Output of an include is scanned again for directives, relative to the
  directory of the included file, up to `max_depth` levels.
"""

import logging
from pathlib import Path
from typing import List, Optional

from shiftinclude.constants import MAX_LINK_NESTED_DEPTH
from shiftinclude.core.interfaces.render import LinkRendererProtocol
from shiftinclude.core.interfaces.text import (
    LineExtractorProtocol,
    LineShifterProtocol,
    ShiftParserProtocol,
)
from shiftinclude.core.models import Anchor, Link, TextBlock
from shiftinclude.logging.helpers import get_logger, trace_io
from shiftinclude.parsing.links import find_links
from shiftinclude.parsing.shift import InvalidShiftToken, ShiftSpecParser
from shiftinclude.parsing.source import DirectiveSource
from shiftinclude.processing.line_ops import LineExtractor
from shiftinclude.processing.line_shift import LineShifter


class IncludeError(RuntimeError):
    """Raised when the file named by an include directive cannot be read."""


class LinkRenderer(LinkRendererProtocol):
    """Resolve include directives into shifted text."""

    def __init__(
        self,
        *,
        parser: Optional[ShiftParserProtocol] = None,
        shifter: Optional[LineShifterProtocol] = None,
        extractor: Optional[LineExtractorProtocol] = None,
        max_depth: int = MAX_LINK_NESTED_DEPTH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('render')
        self._parser = parser or ShiftSpecParser(logger=self._log)
        self._shifter = shifter or LineShifter(logger=self._log)
        self._extractor = extractor or LineExtractor(logger=self._log)
        self._max_depth = max_depth

    def render(self, link: Link, base: Path) -> str:
        """Return the replacement text for *link*, resolving paths against *base*.

        Raises:
            InvalidShiftToken: The directive carries a malformed shift token.
            IncludeError: The included file cannot be read, or its path is unusable.
        """
        if link.kind == 'escaped':
            return link.text[1:]

        # Parse before touching the filesystem so a bad token is reported as such.
        spec = self._parser.parse(link.shift_token) if link.shift_token is not None else None

        target = base / link.target.path
        trace_io(self._log, 'reading include', path=str(target), directive=link.text)
        try:
            text = target.read_text(encoding='utf-8')
        except (OSError, ValueError) as exc:
            raise IncludeError(f'Could not read file for link {link.text} ({target})') from exc

        selection = link.target.selection
        if isinstance(selection, Anchor):
            block: TextBlock = self._extractor.take_anchored_lines(text, selection.name)
        else:
            block = self._extractor.take_lines(text, selection)
        if spec is not None:
            block = self._shifter.apply(spec, block)
        return '\n'.join(block)

    def replace_all(self, content: str, base: Path, source: Path, depth: int = 0) -> str:
        """Substitute every directive in *content*.

        Args:
            content: Chapter (or included file) text.
            base: Directory that relative include paths resolve against.
            source: Chapter path, used in diagnostics.
            depth: Current nesting level of includes.

        Returns:
            The text with every resolvable directive replaced.
        """
        out: List[str] = []
        previous_end = 0
        origin = DirectiveSource(path=source)

        for link in find_links(content):
            out.append(content[previous_end:link.start])
            try:
                rendered = self.render(link, base)
            except (InvalidShiftToken, IncludeError) as exc:
                self._report(exc, link, origin.at_offset(content, link.start))
                # keep the raw directive in the output
                previous_end = link.start
                continue

            if depth < self._max_depth:
                if link.target is not None:
                    nested_base = (base / link.target.path).parent
                    out.append(self.replace_all(rendered, nested_base, source, depth + 1))
                else:
                    out.append(rendered)
            else:
                self._log.error(
                    'Stack depth exceeded in %s. Check for cyclic includes', source,
                )
            previous_end = link.end

        out.append(content[previous_end:])
        return ''.join(out)

    def _report(self, exc: BaseException, link: Link, where: DirectiveSource) -> None:
        self._log.error(
            'Error updating "%s" at %s, %s',
            link.text,
            where.format(),
            exc,
            extra={'context': {'directive': link.text, 'location': where.format()}},
        )
        cause = exc.__cause__
        while cause is not None:
            self._log.warning('Caused by: %s', cause)
            cause = cause.__cause__
