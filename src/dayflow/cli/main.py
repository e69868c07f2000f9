# src/dayflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either runs one command
(`dayflow /week next`) or starts the console REPL.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import handle_line, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = list(sys.argv[1:] if argv is None else argv)

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    if args:
        # one-shot mode: keep stdout for the command's output
        console_level = max(console_level, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if args:
        line = " ".join(args)
        reply = handle_line(state, line if line.startswith("/") else f"/{line}")
        if reply:
            print(reply)
        return 0

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
