# src/prioritask/presentation.py

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .core.models import MoveDirection, Task, TaskId
from .forms.dates import format_display_date
from .reorder.plan import available_moves

DEFAULT_HIGH_COST = Decimal("1000")
_CENT = Decimal("0.01")


def format_currency(value: Any) -> str:
    """Brazilian real: R$ 1.234,56. Missing or non-numeric values render as R$ 0,00."""
    if value is None or isinstance(value, bool):
        return "R$ 0,00"
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return "R$ 0,00"
    if not amount.is_finite():
        return "R$ 0,00"

    amount = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    # en-style grouping first, then swap separators.
    text = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


@dataclass(frozen=True, slots=True)
class TaskRow:
    position: int  # 1-based
    task_id: TaskId
    name: str
    cost: str
    due_date: str
    high_cost: bool
    moves: frozenset[MoveDirection]

    @property
    def can_move_up(self) -> bool:
        return MoveDirection.UP in self.moves

    @property
    def can_move_down(self) -> bool:
        return MoveDirection.DOWN in self.moves


def build_rows(tasks: Sequence[Task], *, high_cost_threshold: Decimal = DEFAULT_HIGH_COST) -> Iterator[TaskRow]:
    count = len(tasks)
    for index, task in enumerate(tasks):
        yield TaskRow(
            position=index + 1,
            task_id=task.id,
            name=task.name,
            cost=format_currency(task.cost),
            due_date=format_display_date(task.due_date),
            high_cost=task.cost >= high_cost_threshold,
            moves=available_moves(index, count),
        )
