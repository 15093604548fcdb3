# src/prioritask/core/board.py

"""
TaskBoard: the authoritative, ordered task snapshot plus list-level UI state.

The snapshot is an immutable tuple. It is only ever replaced wholesale by
refresh(); nothing in the client splices a locally computed order into it.
"""

from __future__ import annotations

import logging

from .errors import TaskApiError
from .models import Task, TaskId
from .ports import TaskApi

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load tasks."
DELETE_ERROR = "Failed to delete task."


class TaskBoard:
    def __init__(self, api: TaskApi) -> None:
        self._api = api
        self._tasks: tuple[Task, ...] = ()

        self.loading: bool = False
        self.error: str = ""
        self.action_message: str = ""

        self.delete_open: bool = False
        self.delete_id: TaskId | None = None

    # -------------------- snapshot --------------------
    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def get(self, task_id: TaskId | None) -> Task | None:
        if task_id is None:
            return None
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def index_of(self, task_id: TaskId | None) -> int | None:
        if task_id is None:
            return None
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    async def refresh(self) -> bool:
        """Replace the snapshot with the server's current ordering. Never raises."""
        self.loading = True
        self.error = ""
        try:
            tasks = await self._api.fetch_all()
            self._tasks = tuple(tasks)
            logger.debug("Refreshed board: %d tasks", len(self._tasks))
            return True
        except TaskApiError as e:
            logger.info("Refresh failed: %s", e.message)
            self.error = e.message or LOAD_ERROR
            return False
        finally:
            self.loading = False

    def clear_message(self) -> None:
        self.action_message = ""

    # -------------------- delete flow --------------------
    def request_delete(self, task_id: TaskId) -> None:
        self.delete_id = task_id
        self.delete_open = True
        self.action_message = ""

    def close_delete(self) -> None:
        self.delete_open = False
        self.delete_id = None

    async def confirm_delete(self) -> bool:
        """
        Delete the task awaiting confirmation.
        On failure the confirmation stays open and the message is surfaced.
        """
        if not self.delete_open or self.delete_id is None:
            return False

        task_id = self.delete_id
        try:
            await self._api.delete(task_id)
        except TaskApiError as e:
            logger.info("Delete failed task_id=%s: %s", task_id, e.message)
            self.action_message = e.message or DELETE_ERROR
            return False

        logger.info("Deleted task_id=%s", task_id)
        self.close_delete()
        await self.refresh()
        return True
