# src/prioritask/forms/controller.py

"""
TaskForm: the create/edit modal.

Lifecycle:
- open_create() -> empty draft
- open_edit(task) -> draft populated from the task (cost as text, date as DD/MM/YYYY)
- type_due_date()/pick_due_date() keep the typed mask and the picker in sync
- submit() -> SubmitOutcome; Saved closes the form and refreshes the board
- close() discards the draft
"""

from __future__ import annotations

import logging

from ..core.board import TaskBoard
from ..core.errors import ConflictError, MalformedInputError, TaskApiError
from ..core.models import Task, TaskId
from ..core.ports import TaskApi
from .dates import format_display_date, normalize_date_input, parse_display_date, to_picker_value
from .draft import (
    NAME,
    Conflict,
    Draft,
    Failure,
    FieldErrors,
    Saved,
    SubmitOutcome,
    ValidationFailed,
)
from .validation import NAME_DUPLICATE, validate_draft

logger = logging.getLogger(__name__)

SAVE_ERROR = "Failed to save task."


class TaskForm:
    def __init__(self, api: TaskApi, board: TaskBoard) -> None:
        self._api = api
        self._board = board

        self.is_open: bool = False
        self.editing_id: TaskId | None = None
        self.draft: Draft = Draft()
        self.errors: FieldErrors = {}

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    # -------------------- lifecycle --------------------
    def open_create(self) -> None:
        self.editing_id = None
        self.draft = Draft()
        self.errors = {}
        self._board.clear_message()
        self.is_open = True

    def open_edit(self, task: Task) -> None:
        self.editing_id = task.id
        self.draft = Draft.from_task(task)
        self.errors = {}
        self._board.clear_message()
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.editing_id = None
        self.draft = Draft()

    # -------------------- field input --------------------
    def set_name(self, value: str) -> None:
        self.draft.name = value

    def set_cost(self, value: str) -> None:
        self.draft.cost = value

    def type_due_date(self, raw: str) -> str:
        """Apply typed input through the DD/MM/YYYY mask; returns the new display value."""
        self.draft.due_date = normalize_date_input(raw)
        return self.draft.due_date

    def pick_due_date(self, iso_date: str) -> str:
        """Apply a date chosen in the picker (canonical) to the typed field."""
        self.draft.due_date = format_display_date(iso_date)
        return self.draft.due_date

    @property
    def picker_value(self) -> str:
        """Picker mirror of the typed value; empty while it is not a real date."""
        return to_picker_value(parse_display_date(self.draft.due_date))

    # -------------------- submission --------------------
    async def submit(self) -> SubmitOutcome:
        self.errors = {}
        self._board.clear_message()

        checked = validate_draft(self.draft, self._board.tasks, self.editing_id)
        if isinstance(checked, ValidationFailed):
            self.errors = dict(checked.field_errors)
            logger.debug("Draft rejected locally: %s", sorted(self.errors))
            return checked

        try:
            if self.is_editing:
                task = await self._api.update(
                    self.editing_id,
                    name=checked.name,
                    cost=checked.cost,
                    due_date=checked.due_date,
                )
            else:
                task = await self._api.create(
                    name=checked.name,
                    cost=checked.cost,
                    due_date=checked.due_date,
                )
        except MalformedInputError as e:
            self.errors = dict(e.field_errors)
            logger.info("Server rejected draft: %s", sorted(self.errors))
            return ValidationFailed(dict(e.field_errors))
        except ConflictError:
            self.errors = {NAME: NAME_DUPLICATE}
            logger.info("Server reported duplicate name: %r", checked.name)
            return Conflict(NAME)
        except TaskApiError as e:
            message = e.message or SAVE_ERROR
            self._board.action_message = message
            logger.info("Save failed: %s", message)
            return Failure(message)

        logger.info("Saved task %r (editing_id=%s)", checked.name, self.editing_id)
        self.close()
        await self._board.refresh()
        return Saved(task)
