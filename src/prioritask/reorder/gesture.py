# src/prioritask/reorder/gesture.py

"""
Drag-and-drop gesture state machine.

    IDLE --start--> DRAGGING --drop(valid)--> DROPPING --finish--> IDLE
                       |  \\--drop(no-op)--> IDLE
                       \\--cancel--> IDLE

DROPPING is the "reordering in progress" state: no new drag may start and
the presentation shows a busy indicator until finish().
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from ..core.models import TaskId


class GesturePhase(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPING = "dropping"


@dataclass(frozen=True, slots=True)
class GestureState:
    phase: GesturePhase = GesturePhase.IDLE
    dragging_id: TaskId | None = None
    drop_target_id: TaskId | None = None

    @property
    def in_progress(self) -> bool:
        return self.phase == GesturePhase.DROPPING


IDLE = GestureState()


def start(state: GestureState, task_id: TaskId) -> GestureState:
    """Begin dragging task_id. Ignored while a move sequence is running."""
    if state.in_progress:
        return state
    return GestureState(phase=GesturePhase.DRAGGING, dragging_id=task_id, drop_target_id=None)


def hover(state: GestureState, task_id: TaskId) -> GestureState:
    """Mark task_id as the current drop target (visual only)."""
    if state.phase != GesturePhase.DRAGGING or state.drop_target_id == task_id:
        return state
    return replace(state, drop_target_id=task_id)


def begin_drop(state: GestureState) -> GestureState:
    if state.phase != GesturePhase.DRAGGING:
        return state
    return replace(state, phase=GesturePhase.DROPPING)


def cancel(state: GestureState) -> GestureState:
    """Abandon the gesture. A running sequence is not interrupted."""
    if state.in_progress:
        return state
    return IDLE


def finish(state: GestureState) -> GestureState:
    return IDLE
