from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, Optional, Sequence, TextIO

from shiftinclude.constants import NAME
from shiftinclude.logging.helpers import get_logger, resolve_level, setup_base_logger
from shiftinclude.runtime.preprocessor import ShiftIncludePreprocessor


logger = get_logger('shiftinclude')


def _configure_logging(enable_json: bool, level: int = logging.INFO) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev is not None and prev == (bool(enable_json), level):
        return
    lg = setup_base_logger(json_logs=enable_json, level=level)
    global logger
    logger = lg
    setattr(_configure_logging, '_configured_mode', (bool(enable_json), level))


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    mdBook calls ``shiftinclude supports RENDERER`` to check renderer support
    and plain ``shiftinclude`` to process a book over stdin/stdout.
    """
    from shiftinclude import __version__

    p = argparse.ArgumentParser(
        prog=NAME,
        description='An mdbook preprocessor which includes files with shift',
    )
    p.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit logs as JSON lines on stderr (also SHIFTINCLUDE_JSON_LOGS=1).',
    )
    p.add_argument(
        '--log-level',
        metavar='LEVEL',
        default=None,
        help='Logging level name, e.g. debug or warning (also SHIFTINCLUDE_LOG_LEVEL).',
    )
    p.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    sub = p.add_subparsers(dest='command')
    sp = sub.add_parser('supports', help='Check whether a renderer is supported by this preprocessor')
    sp.add_argument('renderer')
    return p


class ShiftIncludeCLI:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> int:
        """Run the tool with given argv-like sequence and return the exit code."""
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs or os.getenv('SHIFTINCLUDE_JSON_LOGS') == '1'
        level = resolve_level(ns.log_level or os.getenv('SHIFTINCLUDE_LOG_LEVEL'))
        _configure_logging(json_logs, level)

        if ns.command == 'supports':
            supported = ShiftIncludePreprocessor.supports_renderer(ns.renderer)
            # Signal whether the renderer is supported by exiting with 1 or 0.
            return 0 if supported else 1

        ShiftIncludePreprocessor.process(
            stdin or sys.stdin,
            stdout or sys.stdout,
            logger=get_logger('preprocessor'),
        )
        return 0


def main() -> NoReturn:
    """Entry point for the `shiftinclude` console script."""
    try:
        raise SystemExit(ShiftIncludeCLI.run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
