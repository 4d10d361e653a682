# src/taskbook/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from ..core.state import AppState
from ..tasks.dates import format_due_date, parse_due_date
from ..tasks.task_models import InvalidDateFormatError, Task, TaskNotFoundError
from ..tasks.task_store import split_keywords

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

DATE_HINT = "DD.MM.YYYY, YYYY-MM-DD, MM/DD/YYYY or MM-DD-YYYY"


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(task: Task) -> str:
    status = "completed" if task.completed else "not completed"
    return (
        f"{task.id}. {task.text} "
        f"(priority: {task.priority}, status: {status}, due: {format_due_date(task.due_date)})"
    )


def format_task_list(title: str, tasks: Iterable[Task]) -> str:
    lines = [title]
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)


# ---- argument helpers ----


class UsageError(ValueError):
    pass


def _int_arg(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise UsageError(f"{what} must be an integer, got {raw!r}.") from None


def _task_fields(args: list[str]) -> tuple[int, date, str]:
    """<priority> <due> <text...> -> (priority, due_date, text)."""
    priority = _int_arg(args[0], "Priority")
    try:
        due = parse_due_date(args[1])
    except InvalidDateFormatError:
        raise UsageError(f"Invalid due date {args[1]!r}. Accepted: {DATE_HINT}.") from None
    return priority, due, " ".join(args[2:])


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <priority> <due> <text...>"""
    if len(args) < 2:
        return "Usage: /add <priority> <due> <text...>"
    try:
        priority, due, text = _task_fields(args)
    except UsageError as e:
        return str(e)
    task = state.task_store.add_task(text, priority, due)
    return f"Task added: {format_task(task)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> <priority> <due> <text...>"""
    if len(args) < 3:
        return "Usage: /edit <id> <priority> <due> <text...>"
    try:
        task_id = _int_arg(args[0], "Task id")
        priority, due, text = _task_fields(args[1:])
        task = state.task_store.edit_task(task_id, text, priority, due)
    except (UsageError, TaskNotFoundError) as e:
        return str(e)
    return f"Task updated: {format_task(task)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    try:
        task = state.task_store.delete_task(_int_arg(args[0], "Task id"))
    except (UsageError, TaskNotFoundError) as e:
        return str(e)
    return f"Task deleted: {format_task(task)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    try:
        task = state.task_store.complete_task(_int_arg(args[0], "Task id"))
    except (UsageError, TaskNotFoundError) as e:
        return str(e)
    return f"Task completed: {format_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks(show_completed=False)
    if not tasks:
        return "No open tasks."
    return format_task_list("Tasks:", tasks)


def cmd_all(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks(show_completed=True)
    if not tasks:
        return "No tasks."
    return format_task_list("All tasks:", tasks)


def cmd_search(state: AppState, args: list[str]) -> str:
    keywords = split_keywords(" ".join(args))
    if not keywords:
        return "Usage: /search <keywords...>"
    found = state.task_store.search_tasks(keywords)
    if not found:
        return f"No tasks match: {' '.join(keywords)}"
    return format_task_list("Matching tasks:", found)


def cmd_save(state: AppState, args: list[str]) -> str:
    if state.task_store.save():
        return f"Saved {state.task_store.count_tasks()} tasks to {state.task_store.path}."
    return "Failed to save tasks (see log). Your changes are kept in memory."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <priority> <due> <text...>", aliases=["a"]
)
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <id> <priority> <due> <text...>", aliases=["e"]
)
registry.register(
    "delete", cmd_delete, help_text="Delete a task: /delete <id>", aliases=["del", "rm"]
)
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>", aliases=["complete"])
registry.register("list", cmd_list, help_text="List open tasks by due date.", aliases=["ls"])
registry.register("all", cmd_all, help_text="List all tasks, completed included.")
registry.register(
    "search", cmd_search, help_text="Search task text: /search <keywords...>", aliases=["find"]
)
registry.register("save", cmd_save, help_text="Save tasks to disk now.")
