# src/prioritask/reorder/plan.py

"""
Move planning (pure).

The remote ordering only supports swapping a task with its neighbour.
A jump of N positions is therefore planned as N single steps, all for the
same task and all in the same direction. Planning reads an immutable
snapshot and never touches the network.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..core.models import MoveDirection, Task, TaskId


class PlanError(ValueError):
    """The requested move is not possible in the given snapshot."""


@dataclass(frozen=True, slots=True)
class MoveStep:
    task_id: TaskId
    direction: MoveDirection


def available_moves(index: int, count: int) -> frozenset[MoveDirection]:
    """Directions a row may offer: no "up" for the first row, no "down" for the last."""
    if count <= 0 or index < 0 or index >= count:
        return frozenset()
    out: set[MoveDirection] = set()
    if index > 0:
        out.add(MoveDirection.UP)
    if index < count - 1:
        out.add(MoveDirection.DOWN)
    return frozenset(out)


def _index_of(snapshot: Sequence[Task], task_id: TaskId) -> int:
    for i, t in enumerate(snapshot):
        if t.id == task_id:
            return i
    raise PlanError(f"Task {task_id} is not in the list.")


def plan_step(snapshot: Sequence[Task], task_id: TaskId, direction: MoveDirection) -> MoveStep:
    """Check one adjacent move against the snapshot boundaries."""
    index = _index_of(snapshot, task_id)
    if direction not in available_moves(index, len(snapshot)):
        where = "first" if direction == MoveDirection.UP else "last"
        raise PlanError(f"Task is already {where} and cannot move {direction.value}.")
    return MoveStep(task_id=task_id, direction=direction)


def plan_move(snapshot: Sequence[Task], task_id: TaskId, target_index: int) -> list[MoveStep]:
    """
    Plan the steps that carry task_id from its current index to target_index.

    Returns an empty list when the task is already there.
    """
    if target_index < 0 or target_index >= len(snapshot):
        raise PlanError(f"Target position {target_index} is out of range.")
    source_index = _index_of(snapshot, task_id)

    steps = abs(target_index - source_index)
    direction = MoveDirection.DOWN if target_index > source_index else MoveDirection.UP
    return [MoveStep(task_id=task_id, direction=direction) for _ in range(steps)]
