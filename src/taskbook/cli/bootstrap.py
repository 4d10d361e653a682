# src/taskbook/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- builds the TaskStore and loads the task file,
- wires everything into AppState.

Directories are not created here: TaskStore.save() creates the parent of the
task file and reports failure instead of raising, so an unusable data dir
still leaves a working (empty, in-memory) store.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings and load saved tasks.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_path)
    store.load()

    return AppState(settings=settings, task_store=store)
