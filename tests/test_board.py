# tests/test_board.py

from __future__ import annotations

import httpx
import pytest

from prioritask.api.client import HttpTaskApi
from prioritask.core.board import LOAD_ERROR, TaskBoard
from prioritask.core.errors import NotFoundError, TaskApiError

from .fakes import FakeTaskApi, make_task


@pytest.mark.asyncio
async def test_refresh_replaces_snapshot(api) -> None:
    board = TaskBoard(api)
    assert board.tasks == ()

    assert await board.refresh()
    assert [t.id for t in board.tasks] == [1, 2, 3, 4, 5]
    assert isinstance(board.tasks, tuple)
    assert not board.loading
    assert board.index_of(3) == 2
    assert board.get(3).name == "Fix bike"
    assert board.index_of(99) is None
    assert board.get(None) is None


@pytest.mark.asyncio
async def test_refresh_failure_keeps_previous_snapshot(api) -> None:
    board = TaskBoard(api)
    await board.refresh()
    before = board.tasks

    api.fail_fetch = TaskApiError("")
    assert not await board.refresh()

    assert board.tasks is before
    assert board.error == LOAD_ERROR
    assert not board.loading

    api.fail_fetch = None
    await board.refresh()
    assert board.error == ""


@pytest.mark.asyncio
async def test_delete_flow_confirm(api) -> None:
    board = TaskBoard(api)
    await board.refresh()
    board.action_message = "stale"

    board.request_delete(2)
    assert board.delete_open and board.delete_id == 2
    assert board.action_message == ""

    assert await board.confirm_delete()
    assert not board.delete_open
    assert [t.id for t in board.tasks] == [1, 3, 4, 5]
    assert api.ops()[-2:] == ["delete", "fetch_all"]


@pytest.mark.asyncio
async def test_delete_flow_cancel_makes_no_call(api) -> None:
    board = TaskBoard(api)
    board.request_delete(2)
    board.close_delete()

    assert not await board.confirm_delete()
    assert api.calls == []


@pytest.mark.asyncio
async def test_delete_failure_keeps_confirmation_open() -> None:
    api = FakeTaskApi([make_task(1, "Only")])
    api.fail_delete = NotFoundError("Task not found.", status_code=404)
    board = TaskBoard(api)

    board.request_delete(1)
    assert not await board.confirm_delete()

    assert board.delete_open
    assert board.action_message == "Task not found."
    assert "fetch_all" not in api.ops()


@pytest.mark.asyncio
async def test_garbled_refresh_keeps_loaded_snapshot(settings) -> None:
    responses = iter(
        [
            httpx.Response(200, json=[{"id": 1, "nome": "Pay rent", "custo": 1200, "data_limite": "2026-11-05"}]),
            httpx.Response(200, content=b"<html>oops</html>"),
        ]
    )
    client = httpx.AsyncClient(base_url=settings.api_base_url, transport=httpx.MockTransport(lambda r: next(responses)))
    board = TaskBoard(HttpTaskApi(settings, client=client))
    async with client:
        await board.refresh()
        await board.refresh()

    assert [t.name for t in board.tasks] == ["Pay rent"]
    assert board.error == LOAD_ERROR
    assert not board.loading
