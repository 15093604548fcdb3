# tests/conftest.py

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace

import pytest

from prioritask.cli.bootstrap import create_initial_state
from prioritask.core.state import AppState

from .fakes import FakeTaskApi, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="prioritask-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_base_url="http://tasks.test",
        tasks_path="/api/tarefas",
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        high_cost_threshold=Decimal("1000"),
    )


@pytest.fixture()
def five_tasks() -> list:
    return [
        make_task(1, "Pay rent", "1200", "2026-11-05"),
        make_task(2, "Buy milk", "7.5", "2026-10-20"),
        make_task(3, "Fix bike", "80", "2026-12-01"),
        make_task(4, "Call mom", "0", "2026-10-25"),
        make_task(5, "Renew passport", "257.25", "2027-01-15"),
    ]


@pytest.fixture()
def api(five_tasks) -> FakeTaskApi:
    return FakeTaskApi(five_tasks)


@pytest.fixture()
def state(settings: SimpleNamespace, api: FakeTaskApi) -> AppState:
    """AppState wired with the in-memory API (board not yet loaded)."""
    return create_initial_state(settings=settings, api=api)
