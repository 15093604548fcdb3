# tests/test_reorder_controller.py

from __future__ import annotations

import asyncio

import pytest

from prioritask.core.errors import TaskApiError
from prioritask.core.models import MoveDirection
from prioritask.reorder.controller import MOVE_ERROR
from prioritask.reorder.gesture import IDLE

DOWN = MoveDirection.DOWN
UP = MoveDirection.UP


@pytest.mark.asyncio
async def test_drag_index_1_to_4_issues_three_down_steps_then_one_refresh(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()

    reorder = state.reorder
    assert reorder.drag_start(2)
    reorder.drag_over(5)
    report = await reorder.drop(5)

    assert report is not None and report.ok
    assert api.ops() == ["move", "move", "move", "fetch_all"]
    assert all(c.task_id == 2 and c.direction == DOWN for c in api.move_calls())
    assert [t.id for t in state.board.tasks] == [1, 3, 4, 5, 2]
    assert reorder.gesture == IDLE


@pytest.mark.asyncio
async def test_failure_on_second_step_aborts_and_still_refreshes(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()
    api.fail_move_at[2] = TaskApiError("Move rejected.")

    reorder = state.reorder
    reorder.drag_start(2)
    report = await reorder.drop(5)

    assert report is not None
    assert (report.planned, report.completed) == (3, 1)
    assert api.ops() == ["move", "move", "fetch_all"]
    assert "Move rejected." in state.board.action_message
    # first step stays applied on the server and is now visible
    assert [t.id for t in state.board.tasks] == [1, 3, 2, 4, 5]
    assert reorder.gesture == IDLE
    assert not reorder.reordering


@pytest.mark.asyncio
async def test_failure_on_first_step_uses_server_message_or_default(state, api) -> None:
    await state.board.refresh()
    api.fail_move_at[1] = TaskApiError("")

    await state.reorder.move_to_position(1, 2)

    assert state.board.action_message == MOVE_ERROR
    assert api.ops()[-1] == "fetch_all"


@pytest.mark.asyncio
async def test_steps_are_strictly_sequential(state, api) -> None:
    await state.board.refresh()
    in_flight = 0
    max_in_flight = 0
    real_move = api.move

    async def slow_move(task_id, direction):
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0)
        await real_move(task_id, direction)
        in_flight -= 1

    api.move = slow_move
    await state.reorder.move_to_position(5, 0)

    assert max_in_flight == 1
    assert [t.id for t in state.board.tasks][0] == 5


@pytest.mark.asyncio
async def test_zero_step_move_makes_no_remote_call(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()

    report = await state.reorder.move_to_position(3, 2)

    assert report is not None and report.planned == 0
    assert api.calls == []


@pytest.mark.asyncio
async def test_drop_on_self_or_unknown_is_a_noop(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()
    reorder = state.reorder

    reorder.drag_start(2)
    assert await reorder.drop(2) is None
    assert reorder.gesture == IDLE

    reorder.drag_start(2)
    assert await reorder.drop(99) is None
    assert reorder.gesture == IDLE

    assert api.calls == []


@pytest.mark.asyncio
async def test_drag_end_clears_gesture_without_remote_effect(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()
    reorder = state.reorder

    reorder.drag_start(1)
    reorder.drag_over(3)
    reorder.drag_end()

    assert reorder.gesture == IDLE
    assert api.calls == []
    assert await reorder.drop(3) is None


@pytest.mark.asyncio
async def test_new_drag_rejected_while_sequence_runs(state, api) -> None:
    await state.board.refresh()
    reorder = state.reorder
    gate = asyncio.Event()
    real_move = api.move
    seen: list[bool] = []

    async def gated_move(task_id, direction):
        seen.append(reorder.reordering)
        seen.append(reorder.drag_start(4))
        await gate.wait()
        await real_move(task_id, direction)

    api.move = gated_move
    reorder.drag_start(1)
    drop = asyncio.create_task(reorder.drop(2))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    reorder.drag_end()
    assert reorder.reordering

    gate.set()
    await drop

    assert seen == [True, False]
    assert not reorder.reordering
    assert [t.id for t in state.board.tasks][:2] == [2, 1]


@pytest.mark.asyncio
async def test_move_one_step_success_refreshes(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()

    assert await state.reorder.move_one_step(3, UP)

    assert api.ops() == ["move", "fetch_all"]
    assert [t.id for t in state.board.tasks][:3] == [1, 3, 2]


@pytest.mark.asyncio
async def test_move_one_step_out_of_range_is_an_error_not_a_call(state, api) -> None:
    await state.board.refresh()
    api.calls.clear()

    assert not await state.reorder.move_one_step(1, UP)
    assert state.board.action_message
    assert not await state.reorder.move_one_step(5, DOWN)
    assert not await state.reorder.move_one_step(99, DOWN)

    assert api.calls == []


@pytest.mark.asyncio
async def test_move_one_step_failure_leaves_list_untouched(state, api) -> None:
    await state.board.refresh()
    before = state.board.tasks
    api.calls.clear()
    api.fail_move_at[1] = TaskApiError("Nope.")

    assert not await state.reorder.move_one_step(2, DOWN)

    assert api.ops() == ["move"]
    assert state.board.tasks is before
    assert state.board.action_message == "Nope."
