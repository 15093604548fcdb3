# src/prioritask/reorder/executor.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.errors import TaskApiError
from ..core.ports import TaskApi
from .plan import MoveStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExecutionReport:
    planned: int
    completed: int
    error: TaskApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.completed == self.planned


async def execute_plan(api: TaskApi, steps: Sequence[MoveStep]) -> ExecutionReport:
    """
    Run move steps one at a time against the API.

    Step n+1 is only sent after step n has answered. The first failure stops
    the run; steps that already succeeded stay applied on the server.
    """
    planned = len(steps)
    completed = 0
    for step in steps:
        try:
            await api.move(step.task_id, step.direction)
        except TaskApiError as e:
            logger.info(
                "Move step %d/%d failed task_id=%s direction=%s: %s",
                completed + 1,
                planned,
                step.task_id,
                step.direction.value,
                e.message,
            )
            return ExecutionReport(planned=planned, completed=completed, error=e)
        completed += 1
        logger.debug("Move step %d/%d ok task_id=%s", completed, planned, step.task_id)

    return ExecutionReport(planned=planned, completed=completed)
