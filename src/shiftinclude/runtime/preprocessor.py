from __future__ import annotations

"""
mdBook preprocessor protocol for shiftinclude.

mdBook runs the preprocessor with a JSON array ``[context, book]`` on stdin
and expects the (modified) book as JSON on stdout. Only chapter ``content``
is rewritten; every other field round-trips untouched.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Mapping, Optional, TextIO, Tuple

from shiftinclude.constants import NAME, SUPPORTED_MDBOOK_VERSION, UNSUPPORTED_RENDERER
from shiftinclude.core.interfaces.render import LinkRendererProtocol
from shiftinclude.core.models import PreprocessorConfig
from shiftinclude.logging.helpers import get_logger
from shiftinclude.rendering.renderer import LinkRenderer

Book = Dict[str, Any]


class PreprocessorInputError(ValueError):
    """Raised when stdin does not hold a valid ``[context, book]`` pair."""


@dataclass(frozen=True)
class PreprocessorContext:
    """The subset of mdBook's preprocessor context that shiftinclude uses."""

    root: Path
    src: Path = Path('src')
    renderer: str = 'html'
    mdbook_version: str = ''
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def src_dir(self) -> Path:
        return self.root / self.src

    @classmethod
    def from_json(cls, obj: Any) -> 'PreprocessorContext':
        if not isinstance(obj, dict) or 'root' not in obj:
            raise PreprocessorInputError('preprocessor context must be an object with a "root" key')
        config = obj.get('config') or {}
        book_cfg = config.get('book') or {}
        options = (config.get('preprocessor') or {}).get(NAME) or {}
        return cls(
            root=Path(obj['root']),
            src=Path(book_cfg.get('src') or 'src'),
            renderer=str(obj.get('renderer') or 'html'),
            mdbook_version=str(obj.get('mdbook_version') or ''),
            options=options,
        )


def parse_input(stream: TextIO) -> Tuple[PreprocessorContext, Book]:
    """Read and validate the ``[context, book]`` payload sent by mdBook."""
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        raise PreprocessorInputError(f'unable to parse preprocessor input: {exc}') from exc
    if not isinstance(payload, list) or len(payload) != 2:
        raise PreprocessorInputError('preprocessor input must be a JSON array [context, book]')
    ctx_obj, book = payload
    if not isinstance(book, dict):
        raise PreprocessorInputError('book must be a JSON object')
    return PreprocessorContext.from_json(ctx_obj), book


def _sections_key(book: Book) -> str:
    # mdBook 0.5 renamed "sections" to "items".
    return 'items' if 'items' in book and 'sections' not in book else 'sections'


def iter_chapters(items: Iterable[Any]) -> Iterable[Dict[str, Any]]:
    """Yield chapter objects depth-first, skipping separators and part titles."""
    for item in items or ():
        if not isinstance(item, dict) or 'Chapter' not in item:
            continue
        chapter = item['Chapter']
        yield chapter
        yield from iter_chapters(chapter.get('sub_items') or ())


class ShiftIncludePreprocessor:
    """A preprocessor that acts like ``{{#include}}`` but allows shifting."""

    name = NAME

    def __init__(
        self,
        ctx: Optional[PreprocessorContext] = None,
        *,
        renderer: Optional[LinkRendererProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('preprocessor')
        config = PreprocessorConfig.from_table(ctx.options if ctx else None, logger=self._log)
        self._renderer = renderer or LinkRenderer(max_depth=config.max_depth, logger=get_logger('render'))
        if ctx is not None and ctx.mdbook_version and ctx.mdbook_version != SUPPORTED_MDBOOK_VERSION:
            self._log.warning(
                'The %s plugin was written against version %s of mdbook, '
                "but we're being called from version %s",
                self.name,
                SUPPORTED_MDBOOK_VERSION,
                ctx.mdbook_version,
            )

    @staticmethod
    def supports_renderer(renderer: str) -> bool:
        """This preprocessor emits Markdown, so almost any renderer is fine."""
        return renderer != UNSUPPORTED_RENDERER

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """Rewrite the content of every chapter in *book* in place and return it."""
        src_dir = ctx.src_dir
        chapters: List[Dict[str, Any]] = list(iter_chapters(book.get(_sections_key(book)) or ()))
        for chapter in chapters:
            path = chapter.get('path')
            if not path:
                continue
            # chapter paths are relative to src and always use forward slashes
            chapter_path = Path(PurePosixPath(path))
            base = src_dir / chapter_path.parent
            chapter['content'] = self._renderer.replace_all(
                chapter.get('content') or '', base, chapter_path, 0,
            )
        self._log.debug('processed %d chapter(s)', len(chapters))
        return book

    @classmethod
    def process(cls, stdin: TextIO, stdout: TextIO, *, logger: Optional[logging.Logger] = None) -> Book:
        """Full protocol round-trip: read ``[context, book]``, write the book."""
        ctx, book = parse_input(stdin)
        processed = cls(ctx, logger=logger).run(ctx, book)
        json.dump(processed, stdout, ensure_ascii=False)
        return processed
