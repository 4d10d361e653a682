# src/taskbook/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the task file), runs the
console loop and saves once more on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(*, settings=None) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    log_dir = settings.data_dir if getattr(settings, "log_file_enabled", True) else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "taskbook"))

    state = create_initial_state(settings=settings)

    try:
        run_console_loop(state)
    finally:
        print("Saving tasks and exiting.")
        if not state.task_store.save():
            print(f"Could not save tasks to {state.task_store.path} (see log).")
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
