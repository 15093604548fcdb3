# src/prioritask/forms/draft.py

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..core.models import Task
from .dates import format_display_date

NAME = "name"
COST = "cost"
DUE_DATE = "due_date"

FieldErrors = dict[str, str]


@dataclass(slots=True)
class Draft:
    """Create/edit form state. Every field is raw text and may be invalid."""

    name: str = ""
    cost: str = ""
    due_date: str = ""  # display mask, DD/MM/YYYY or a prefix of it

    @classmethod
    def from_task(cls, task: Task) -> Draft:
        return cls(
            name=task.name or "",
            cost=_cost_text(task.cost),
            due_date=format_display_date(task.due_date),
        )


def _cost_text(cost: Decimal | None) -> str:
    if cost is None:
        return ""
    # 1500.00 -> "1500", 12.50 -> "12.5"
    return format(cost.normalize(), "f")


@dataclass(frozen=True, slots=True)
class ValidDraft:
    """A draft that passed local validation, ready for the API."""

    name: str
    cost: Decimal
    due_date: str  # canonical YYYY-MM-DD


# ---- Submission outcome (tagged) ----


@dataclass(frozen=True, slots=True)
class Saved:
    task: Task | None


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    field_errors: FieldErrors = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Conflict:
    field: str = NAME


@dataclass(frozen=True, slots=True)
class Failure:
    message: str


SubmitOutcome = Saved | ValidationFailed | Conflict | Failure
