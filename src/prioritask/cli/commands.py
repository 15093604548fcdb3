# src/prioritask/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.models import MoveDirection, Task
from ..core.state import AppState
from ..forms.draft import Conflict, Failure, Saved, SubmitOutcome, ValidationFailed
from ..forms.validation import NAME_DUPLICATE
from ..presentation import DEFAULT_HIGH_COST, build_rows

CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
# Third argument: the text after the command name, whitespace kept as typed.
CommandHandler3 = Callable[[AppState, list[str], str], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

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

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        raw = parts[1] if len(parts) > 1 else ""
        args = raw.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        if len(inspect.signature(handler).parameters) >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, args, raw)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# -------------------- rendering --------------------


def render_board(state: AppState) -> str:
    board = state.board
    lines: list[str] = []

    if board.error:
        lines.append(f"[error] {board.error}")
    if board.action_message:
        lines.append(f"[!] {board.action_message}")

    if not board.tasks:
        lines.append("(no tasks)")
        return "\n".join(lines)

    threshold = getattr(state.settings, "high_cost_threshold", DEFAULT_HIGH_COST)
    busy = state.reorder.reordering
    for row in build_rows(board.tasks, high_cost_threshold=threshold):
        up = "↑" if row.can_move_up and not busy else " "
        down = "↓" if row.can_move_down and not busy else " "
        flag = "$" if row.high_cost else " "
        lines.append(f"{row.position:>3}. {up}{down} {flag} {row.name:<30} {row.cost:>16}  {row.due_date}")
    return "\n".join(lines)


def _resolve_row(state: AppState, raw: str | None) -> Task | None:
    if raw is None:
        return None
    try:
        position = int(raw)
    except ValueError:
        return None
    tasks = state.board.tasks
    if position < 1 or position > len(tasks):
        return None
    return tasks[position - 1]


def _split_fields(raw: str) -> list[str]:
    """'Pay rent; 1200; 05/11/2026' -> ['Pay rent', '1200', '05/11/2026']"""
    parts = [p.strip() for p in raw.split(";")]
    return (parts + ["", "", ""])[:3]


def _apply_date(state: AppState, raw: str) -> None:
    if _ISO_DATE.fullmatch(raw):
        state.form.pick_due_date(raw)
    else:
        state.form.type_due_date(raw)


def _describe_outcome(state: AppState, outcome: SubmitOutcome) -> str:
    if isinstance(outcome, Saved):
        return "Task saved.\n" + render_board(state)
    if isinstance(outcome, ValidationFailed):
        lines = ["Task not saved:"]
        for field, msg in outcome.field_errors.items():
            lines.append(f"  {field}: {msg}")
        return "\n".join(lines)
    if isinstance(outcome, Conflict):
        return f"Task not saved:\n  {outcome.field}: {NAME_DUPLICATE}"
    if isinstance(outcome, Failure):
        return f"Task not saved: {outcome.message}"
    return "Task not saved."


# -------------------- commands --------------------


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    return (
        "Status:\n"
        f"  API: {getattr(settings, 'api_base_url', '?')}{getattr(settings, 'tasks_path', '')}\n"
        f"  Tasks loaded: {len(state.board.tasks)}\n"
        f"  Reordering: {'yes' if state.reorder.reordering else 'no'}"
    )


async def cmd_list(state: AppState, args: list[str]) -> str:
    return render_board(state)


async def cmd_refresh(state: AppState, args: list[str]) -> str:
    await state.board.refresh()
    return render_board(state)


async def cmd_new(state: AppState, args: list[str], raw: str) -> str:
    """
    /new name; cost; dd/mm/yyyy
    A YYYY-MM-DD date is taken as a calendar pick.
    """
    name, cost, due = _split_fields(raw)
    form = state.form
    form.open_create()
    form.set_name(name)
    form.set_cost(cost)
    _apply_date(state, due)

    outcome = await form.submit()
    if form.is_open:
        form.close()
    return _describe_outcome(state, outcome)


async def cmd_edit(state: AppState, args: list[str], raw: str) -> str:
    """
    /edit N name; cost; dd/mm/yyyy
    Blank parts keep the task's current value.
    """
    task = _resolve_row(state, args[0] if args else None)
    if task is None:
        return "Usage: /edit N name; cost; dd/mm/yyyy (N = row number from /list)."

    rest = raw.split(maxsplit=1)
    name, cost, due = _split_fields(rest[1] if len(rest) > 1 else "")
    form = state.form
    form.open_edit(task)
    if name:
        form.set_name(name)
    if cost:
        form.set_cost(cost)
    if due:
        _apply_date(state, due)

    outcome = await form.submit()
    if form.is_open:
        form.close()
    return _describe_outcome(state, outcome)


async def cmd_delete(state: AppState, args: list[str]) -> str:
    task = _resolve_row(state, args[0] if args else None)
    if task is None:
        return "Usage: /delete N (N = row number from /list)."
    state.board.request_delete(task.id)
    return f"Delete '{task.name}'? This cannot be undone. Type /confirm or /cancel."


async def cmd_confirm(state: AppState, args: list[str]) -> str:
    board = state.board
    if not board.delete_open:
        return "Nothing to confirm."
    if await board.confirm_delete():
        return "Task deleted.\n" + render_board(state)
    return f"Task not deleted: {board.action_message}"


async def cmd_cancel(state: AppState, args: list[str]) -> str:
    state.board.close_delete()
    state.form.close()
    state.reorder.drag_end()
    return "Cancelled."


async def _move_step(state: AppState, args: list[str], direction: MoveDirection) -> str:
    task = _resolve_row(state, args[0] if args else None)
    if task is None:
        return f"Usage: /{direction.value} N (N = row number from /list)."
    await state.reorder.move_one_step(task.id, direction)
    return render_board(state)


async def cmd_up(state: AppState, args: list[str]) -> str:
    return await _move_step(state, args, MoveDirection.UP)


async def cmd_down(state: AppState, args: list[str]) -> str:
    return await _move_step(state, args, MoveDirection.DOWN)


async def cmd_move(state: AppState, args: list[str]) -> str:
    """
    /move N M -> drag row N and drop it on row M.
    """
    if len(args) < 2:
        return "Usage: /move N M (drag row N onto row M)."

    source = _resolve_row(state, args[0])
    target = _resolve_row(state, args[1])
    reorder = state.reorder

    if source is None:
        return "Usage: /move N M (drag row N onto row M)."
    if not reorder.drag_start(source.id):
        return "A reorder is already in progress."
    if target is None:
        reorder.drag_end()
        return "Drop target is not in the list; nothing moved."

    reorder.drag_over(target.id)
    report = await reorder.drop(target.id)
    if report is not None:
        logger.debug("Move report: %s", report)
    return render_board(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show API address and list state.")
registry.register("list", cmd_list, help_text="Show tasks in priority order.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.")
registry.register("new", cmd_new, help_text="Create a task: /new name; cost; dd/mm/yyyy.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit N name; cost; dd/mm/yyyy.")
registry.register("delete", cmd_delete, help_text="Ask to delete row N: /delete N.", aliases=["rm"])
registry.register("confirm", cmd_confirm, help_text="Confirm a pending delete.")
registry.register("cancel", cmd_cancel, help_text="Cancel a pending delete or edit.")
registry.register("up", cmd_up, help_text="Move row N one position up: /up N.")
registry.register("down", cmd_down, help_text="Move row N one position down: /down N.")
registry.register("move", cmd_move, help_text="Drag row N onto row M: /move N M.")
