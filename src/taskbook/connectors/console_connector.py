# src/taskbook/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def run_console_loop(state: AppState) -> None:
    """
    Read commands from stdin until /exit, EOF or Ctrl+C.

    The caller owns the final save; this loop only dispatches commands.
    """
    logger.info("Console connector started (tasks=%s).", state.task_store.count_tasks())
    print("Type /help for commands, /exit to save and quit.")

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input)
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt during command, exiting.")
            print()
            break
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list available commands."
        print(response)

    logger.info("Console connector finished.")
