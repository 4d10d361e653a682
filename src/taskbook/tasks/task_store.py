# src/taskbook/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from pathlib import Path

from . import dates
from .task_models import Task, TaskNotFoundError

logger = logging.getLogger(__name__)


def split_keywords(raw: str) -> list[str]:
    """Split a typed search line into keywords (any run of whitespace separates)."""
    return raw.split()


class TaskStore:
    """
    JSON file task store.

    The whole collection lives in memory; every mutating call rewrites the
    whole file. There are no partial updates.

    Ids come from a counter that only grows (seeded from the highest id on
    load), so an id freed by delete_task is never handed out again.

    Every Task returned to callers is a copy; the store's own list is never
    exposed.
    """

    parse_due_date = staticmethod(dates.parse_due_date)

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._last_id = 0

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: int) -> Task:
        return replace(self._tasks[self._index_of(task_id)])

    def add_task(self, text: str, priority: int, due_date: date) -> Task:
        task = Task(
            id=self._next_id(),
            text=text,
            completed=False,
            priority=priority,
            due_date=due_date,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s priority=%s due=%s", task.id, priority, due_date)
        self.save()
        return replace(task)

    def edit_task(self, task_id: int, text: str, priority: int, due_date: date) -> Task:
        task = self._tasks[self._index_of(task_id)]
        task.text = text
        task.priority = priority
        task.due_date = due_date
        logger.debug("Task edited id=%s priority=%s due=%s", task_id, priority, due_date)
        self.save()
        return replace(task)

    def delete_task(self, task_id: int) -> Task:
        task = self._tasks.pop(self._index_of(task_id))
        logger.debug("Task deleted id=%s", task_id)
        self.save()
        return task

    def complete_task(self, task_id: int) -> Task:
        task = self._tasks[self._index_of(task_id)]
        task.completed = True
        logger.debug("Task completed id=%s", task_id)
        self.save()
        return replace(task)

    def list_tasks(self, show_completed: bool = False) -> list[Task]:
        """
        Tasks ordered by due date (ascending, stable on ties).

        Returns a sorted copy; the stored order is left alone.
        """
        ordered = sorted(self._tasks, key=lambda t: t.due_date)
        return [replace(t) for t in ordered if show_completed or not t.completed]

    def search_tasks(self, keywords: Sequence[str]) -> list[Task]:
        """
        Tasks whose text contains ANY of the keywords, case-insensitively.

        Collection order, no sorting. No keywords -> no matches.
        """
        needles = [k.lower() for k in keywords]
        if not needles:
            return []
        out: list[Task] = []
        for task in self._tasks:
            haystack = task.text.lower()
            if any(n in haystack for n in needles):
                out.append(replace(task))
        return out

    # ---- persistence ----

    def save(self) -> bool:
        """
        Write the whole collection to disk.

        Returns False (and logs) on failure; the in-memory list stays
        authoritative until the next successful save.
        """
        try:
            payload = json.dumps(
                [t.to_record() for t in self._tasks], ensure_ascii=False, indent=2
            )
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_name(self._path.name + ".tmp")
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save tasks to %s", self._path)
            return False
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)
        return True

    def load(self) -> int:
        """
        Replace the in-memory collection with the file contents.

        Never raises: a missing, unreadable or unparsable file leaves the
        store empty. Malformed records are skipped; records with a duplicate
        or non-positive id are kept and renumbered after the highest id.
        """
        self._tasks = []
        self._last_id = 0

        if not self._path.exists():
            logger.info("No task file at %s, starting empty.", self._path)
            return 0

        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to load tasks from %s", self._path)
            return 0

        if not isinstance(data, list):
            logger.error("Task file %s does not hold a JSON array; starting empty.", self._path)
            return 0

        seen: set[int] = set()
        renumber: list[Task] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object task record: %r", raw)
                continue
            try:
                task = Task.from_record(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed task record %r: %s", raw, e)
                continue
            # Old files reuse ids after deletes; keep the task, give it a new id below.
            if task.id <= 0 or task.id in seen:
                renumber.append(task)
            else:
                seen.add(task.id)
            self._tasks.append(task)

        self._last_id = max(seen, default=0)
        for task in renumber:
            old_id = task.id
            task.id = self._next_id()
            logger.warning("Renumbered task with invalid or duplicate id=%s -> %s", old_id, task.id)
        logger.info("Loaded %d tasks from %s", len(self._tasks), self._path)
        return len(self._tasks)
