# src/prioritask/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the HTTP transport swappable and makes testing easier.
"""

from decimal import Decimal
from typing import Protocol

from .models import MoveDirection, Task, TaskId


class TaskApi(Protocol):
    """
    Remote task collaborator.

    Every method raises core.errors.TaskApiError (or a subclass) on failure.
    create()/update() return None when the server answers without a task body.
    move() gives no information about the new order; callers re-fetch.
    """

    async def fetch_all(self) -> list[Task]: ...

    async def create(self, *, name: str, cost: Decimal, due_date: str) -> Task | None: ...

    async def update(
        self, task_id: TaskId, *, name: str, cost: Decimal, due_date: str
    ) -> Task | None: ...

    async def delete(self, task_id: TaskId) -> None: ...

    async def move(self, task_id: TaskId, direction: MoveDirection) -> None: ...
