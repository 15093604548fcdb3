# src/prioritask/core/errors.py

"""
Remote failure classes.

The API client raises these; the board, the form and the reorder controller
catch them at the initiating action and turn them into visible state.
"""

from __future__ import annotations


class TaskApiError(Exception):
    """Generic remote failure carrying a user-facing message."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedInputError(TaskApiError):
    """The server rejected the payload field by field (HTTP 400)."""

    def __init__(
        self,
        field_errors: dict[str, str],
        message: str = "Invalid task data.",
        *,
        status_code: int | None = 400,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.field_errors = dict(field_errors)


class ConflictError(TaskApiError):
    """Another task already uses this name (HTTP 409)."""


class NotFoundError(TaskApiError):
    """The referenced task no longer exists (HTTP 404)."""
