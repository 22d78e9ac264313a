# src/nexttask/cli/main.py

"""
CLI entrypoint.

Initializes logging, parses argv into exactly one command, builds AppState
(which ensures the schema) and runs the command.

Exit status: 0 on success, 1 when storage or traversal fails, 2 for an
unrecognized command.
"""

from __future__ import annotations

import logging
import sqlite3
import sys
from collections.abc import Sequence

from .bootstrap import create_initial_state
from .commands import InvalidCommand, registry
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.tree import TraversalError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def execute(argv: Sequence[str], *, settings=None) -> int:
    """Run one command and print its output. Logging must already be configured."""
    if settings is None:
        settings = get_settings()

    try:
        command = registry.parse(argv)
    except InvalidCommand as e:
        logger.debug("Rejected argv=%r: %s", list(argv), e)
        print(f"invalid command: {' '.join(argv)}", file=sys.stderr)
        print(registry.build_help(), file=sys.stderr)
        return EXIT_INVALID

    try:
        state = create_initial_state(settings=settings)
        output = command.run(state)
    except (sqlite3.Error, TraversalError) as e:
        logger.debug("Command %s failed.", command.name, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILED

    if output:
        print(output)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(level=str(getattr(settings, "log_level", "WARNING")), log_dir=settings.data_dir)

    args = list(sys.argv[1:] if argv is None else argv)
    logger.debug("Starting nexttask argv=%r db=%s", args, settings.db_path)
    return execute(args, settings=settings)


if __name__ == "__main__":
    sys.exit(main())
