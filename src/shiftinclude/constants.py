from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Preprocessor name as registered in book.toml (`[preprocessor.shiftinclude]`).
NAME: str = 'shiftinclude'

# mdBook release the JSON protocol handling was written against.
SUPPORTED_MDBOOK_VERSION: str = '0.4.40'

# Renderer name that `supports` rejects; every other renderer accepts Markdown.
UNSUPPORTED_RENDERER: str = 'not-supported'

# A directive preceded by this character is emitted verbatim, minus the escape.
ESCAPE_CHAR: str = '\\'

# Default bound for includes nested inside included files.
MAX_LINK_NESTED_DEPTH: int = 10

# Shift token selecting common-whitespace stripping.
AUTO_TOKEN: str = 'auto'
