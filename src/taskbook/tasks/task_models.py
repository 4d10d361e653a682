# src/taskbook/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


class TaskNotFoundError(LookupError):
    """No task with the requested id exists in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with id {task_id} not found.")
        self.task_id = task_id


class InvalidDateFormatError(ValueError):
    """A due date string matched none of the accepted formats."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid date format: {value!r}")
        self.value = value


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool
    priority: int
    due_date: date

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority,
            "due_date": self.due_date.isoformat(),
        }

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a persisted record.

        Accepts both the current snake_case layout and the capitalized layout
        of the old tasks.json files ("ID", "Text", ..., "DueDate" as an
        RFC 3339 timestamp). Raises KeyError/ValueError/TypeError on garbage.
        """
        if "id" in raw:
            return cls(
                id=_as_int(raw["id"]),
                text=str(raw.get("text") or ""),
                completed=_as_bool(raw.get("completed", False)),
                priority=_as_int(raw.get("priority", 0)),
                due_date=_parse_stored_date(raw["due_date"]),
            )

        # legacy layout
        return cls(
            id=_as_int(raw["ID"]),
            text=str(raw.get("Text") or ""),
            completed=_as_bool(raw.get("Completed", False)),
            priority=_as_int(raw.get("Priority", 0)),
            due_date=_parse_stored_date(raw["DueDate"]),
        )


def _as_int(value: Any) -> int:
    # bool is an int subclass; reject it so {"id": true} is not task 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    return value


def _as_bool(value: Any) -> bool:
    # "false" would be truthy under bool()
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return value


def _parse_stored_date(value: Any) -> date:
    if not isinstance(value, str):
        raise TypeError(f"expected date string, got {type(value).__name__}")
    if "T" in value:
        # "2024-06-01T00:00:00Z" -> calendar date as written, timezone ignored
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return date.fromisoformat(value)
