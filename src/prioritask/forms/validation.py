# src/prioritask/forms/validation.py

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from ..core.models import Task, TaskId
from .dates import parse_display_date
from .draft import COST, DUE_DATE, NAME, Draft, FieldErrors, ValidationFailed, ValidDraft

NAME_REQUIRED = "Name is required."
NAME_DUPLICATE = "A task with this name already exists."
COST_REQUIRED = "Cost is required."
COST_NOT_A_NUMBER = "Cost must be a number."
COST_NEGATIVE = "Cost must be greater than or equal to zero."
DUE_DATE_INVALID = "Due date must be in dd/MM/yyyy format."

# Plain decimal literals only: no "nan", "inf", digit separators or commas.
_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_cost(text: str | None) -> Decimal | None:
    """Parse a typed cost; None if it is not a finite decimal number."""
    s = (text or "").strip()
    if not _NUMBER.fullmatch(s):
        return None
    try:
        value = Decimal(s)
    except InvalidOperation:
        return None
    # Sent as a JSON number: must survive float conversion ("1e400" -> inf).
    if not math.isfinite(float(value)):
        return None
    return value


def _name_key(name: str) -> str:
    return name.strip().casefold()


def is_duplicate_name(name: str, tasks: Iterable[Task], editing_id: TaskId | None = None) -> bool:
    key = _name_key(name)
    if not key:
        return False
    for t in tasks:
        if editing_id is not None and t.id == editing_id:
            continue
        if _name_key(t.name or "") == key:
            return True
    return False


def _check(
    draft: Draft,
    tasks: Iterable[Task],
    editing_id: TaskId | None,
) -> tuple[FieldErrors, Decimal | None, str | None]:
    errors: FieldErrors = {}

    name = (draft.name or "").strip()
    if not name:
        errors[NAME] = NAME_REQUIRED
    elif is_duplicate_name(name, tasks, editing_id):
        errors[NAME] = NAME_DUPLICATE

    cost: Decimal | None = None
    cost_text = (draft.cost or "").strip()
    if not cost_text:
        errors[COST] = COST_REQUIRED
    else:
        cost = parse_cost(cost_text)
        if cost is None:
            errors[COST] = COST_NOT_A_NUMBER
        elif cost < 0:
            errors[COST] = COST_NEGATIVE

    due_date = parse_display_date(draft.due_date)
    if due_date is None:
        errors[DUE_DATE] = DUE_DATE_INVALID

    return errors, cost, due_date


def collect_errors(
    draft: Draft,
    tasks: Iterable[Task],
    editing_id: TaskId | None = None,
) -> FieldErrors:
    """
    Run every field check and return all failures at once.

    The task being edited (editing_id) is excluded from the uniqueness check.
    """
    errors, _, _ = _check(draft, tasks, editing_id)
    return errors


def validate_draft(
    draft: Draft,
    tasks: Iterable[Task],
    editing_id: TaskId | None = None,
) -> ValidDraft | ValidationFailed:
    """Validate and, when clean, convert to the values sent to the API."""
    errors, cost, due_date = _check(draft, tasks, editing_id)
    if errors or cost is None or due_date is None:
        return ValidationFailed(errors)
    return ValidDraft(name=draft.name.strip(), cost=cost, due_date=due_date)
