# src/dayflow/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    One console line -> reply text (None for an empty line).

    Plain text without a leading slash is a shortcut for "/task add".
    """
    line = line.strip()
    if not line:
        return None
    if not line.startswith("/"):
        line = f"/task add {line}"

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        with state.lock:
            reply = command_registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."
    return reply


def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "dayflow"))
    logger.info("Console connector started (locale=%s).", state.locale)
    _print_ts(f"[{app_name}] Use /help for commands, /exit to quit. Plain text adds a task.\n")

    reply = handle_line(state, "/today")
    if reply:
        print(reply + "\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            print(reply + "\n")

    logger.info("Console connector finished.")
