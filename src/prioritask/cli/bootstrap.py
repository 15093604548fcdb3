# src/prioritask/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) log directory exists,
- wires the API client, board, form and reorder controller into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..api.client import HttpTaskApi
from ..config import get_settings
from ..core.board import TaskBoard
from ..core.ports import TaskApi
from ..core.state import AppState
from ..forms.controller import TaskForm
from ..reorder.controller import ReorderController

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, api: TaskApi | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the API) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = HttpTaskApi(settings)
        logger.debug("Using task API at %s%s", settings.api_base_url, settings.tasks_path)

    board = TaskBoard(api)
    return AppState(
        settings=settings,
        api=api,
        board=board,
        form=TaskForm(api, board),
        reorder=ReorderController(api, board),
    )


async def close_state(state: AppState) -> None:
    """Release the HTTP client (best-effort)."""
    aclose = getattr(state.api, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("API client close failed.", exc_info=True)
