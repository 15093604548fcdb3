# src/prioritask/reorder/controller.py

from __future__ import annotations

import logging

from ..core.board import TaskBoard
from ..core.errors import TaskApiError
from ..core.models import MoveDirection, TaskId
from ..core.ports import TaskApi
from . import gesture
from .executor import ExecutionReport, execute_plan
from .plan import PlanError, plan_move, plan_step

logger = logging.getLogger(__name__)

MOVE_ERROR = "Failed to reorder task."
PARTIAL_NOTE = "The list was refreshed; some steps may already have been applied."


class ReorderController:
    """
    Turns reorder gestures into single-step remote moves.

    The controller never predicts the resulting order: after every completed
    (or aborted) sequence the board is re-fetched and the server's order wins.
    """

    def __init__(self, api: TaskApi, board: TaskBoard) -> None:
        self._api = api
        self._board = board
        self.gesture: gesture.GestureState = gesture.IDLE

    @property
    def reordering(self) -> bool:
        return self.gesture.in_progress

    # -------------------- buttons --------------------
    async def move_one_step(self, task_id: TaskId, direction: MoveDirection) -> bool:
        """
        Move a task one position. Boundary violations are reported, not ignored.
        A failed call changes nothing locally.
        """
        self._board.clear_message()
        try:
            step = plan_step(self._board.tasks, task_id, direction)
        except PlanError as e:
            self._board.action_message = str(e)
            return False

        try:
            await self._api.move(step.task_id, step.direction)
        except TaskApiError as e:
            logger.info("Move failed task_id=%s direction=%s: %s", task_id, direction.value, e.message)
            self._board.action_message = e.message or MOVE_ERROR
            return False

        logger.info("Moved task_id=%s %s", task_id, direction.value)
        await self._board.refresh()
        return True

    # -------------------- drag and drop --------------------
    async def move_to_position(self, task_id: TaskId, target_index: int) -> ExecutionReport | None:
        """
        Carry a task to target_index with sequential single steps.

        Zero steps: no remote call at all. Any failure aborts the rest of the
        sequence and still re-fetches, since earlier steps are not undone.
        Returns None when nothing could be planned.
        """
        self._board.clear_message()
        try:
            steps = plan_move(self._board.tasks, task_id, target_index)
        except PlanError as e:
            self._board.action_message = str(e)
            return None

        if not steps:
            return ExecutionReport(planned=0, completed=0)

        logger.info(
            "Moving task_id=%s %d step(s) %s",
            task_id,
            len(steps),
            steps[0].direction.value,
        )
        report = await execute_plan(self._api, steps)

        if report.error is not None:
            message = report.error.message or MOVE_ERROR
            if report.completed:
                message = f"{message} {PARTIAL_NOTE}"
            self._board.action_message = message

        await self._board.refresh()
        return report

    def drag_start(self, task_id: TaskId) -> bool:
        """Start a drag. Rejected while a move sequence is in flight."""
        if self.reordering:
            return False
        self.gesture = gesture.start(self.gesture, task_id)
        return True

    def drag_over(self, task_id: TaskId) -> None:
        self.gesture = gesture.hover(self.gesture, task_id)

    def drag_end(self) -> None:
        self.gesture = gesture.cancel(self.gesture)

    async def drop(self, target_id: TaskId) -> ExecutionReport | None:
        """
        Drop the dragged task onto target_id.

        Dropping onto itself, or with either task missing from the snapshot,
        is a no-op that just clears the gesture.
        """
        state = self.gesture
        if state.phase != gesture.GesturePhase.DRAGGING:
            return None

        source_id = state.dragging_id
        source_index = self._board.index_of(source_id)
        target_index = self._board.index_of(target_id)
        if source_id is None or source_id == target_id or source_index is None or target_index is None:
            self.gesture = gesture.IDLE
            return None

        self.gesture = gesture.begin_drop(state)
        try:
            return await self.move_to_position(source_id, target_index)
        finally:
            self.gesture = gesture.finish(self.gesture)
