# src/prioritask/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .board import TaskBoard
from .ports import TaskApi

if TYPE_CHECKING:
    from ..forms.controller import TaskForm
    from ..reorder.controller import ReorderController


@dataclass(slots=True)
class AppState:
    """Everything a connector needs: settings, the API port and the screen controllers."""

    settings: Any
    api: TaskApi
    board: TaskBoard
    form: TaskForm
    reorder: ReorderController
