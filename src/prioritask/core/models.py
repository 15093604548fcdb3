# src/prioritask/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


class MoveDirection(StrEnum):
    """Single-step move supported by the remote ordering."""

    UP = "up"
    DOWN = "down"


TaskId = int | str
# Opaque server-assigned identifier; only equality is meaningful.


@dataclass(frozen=True, slots=True)
class Task:
    """
    One task as returned by the API.

    Position is not an attribute: it is the index inside the ordered
    snapshot the task came from.
    """

    id: TaskId
    name: str
    cost: Decimal
    due_date: str  # canonical YYYY-MM-DD
