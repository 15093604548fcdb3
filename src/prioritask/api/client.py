# src/prioritask/api/client.py

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from ..core.errors import ConflictError, MalformedInputError, NotFoundError, TaskApiError
from ..core.models import MoveDirection, Task, TaskId

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load tasks."
SAVE_ERROR = "Failed to save task."
DELETE_ERROR = "Failed to delete task."
MOVE_ERROR = "Failed to reorder task."

# Wire field name -> draft field name.
WIRE_FIELDS: dict[str, str] = {
    "nome": "name",
    "custo": "cost",
    "data_limite": "due_date",
}


def _make_timeout(settings: Any) -> httpx.Timeout:
    connect_s = float(getattr(settings, "connect_timeout_seconds", 5.0))
    read_s = float(getattr(settings, "read_timeout_seconds", 15.0))
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _safe_json(response: httpx.Response) -> Any:
    """Decode a response body; anything undecodable degrades to {}."""
    try:
        return response.json()
    except ValueError:
        return {}


def _parse_cost(raw: Any) -> Decimal:
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return Decimal(0)
    return value if value.is_finite() else Decimal(0)


def parse_task(raw: Any) -> Task | None:
    """Build a Task from one wire object; None when it carries no id."""
    if not isinstance(raw, dict):
        return None
    task_id = raw.get("id")
    if task_id is None or isinstance(task_id, bool):
        return None
    return Task(
        id=task_id,
        name=str(raw.get("nome") or ""),
        cost=_parse_cost(raw.get("custo")),
        due_date=str(raw.get("data_limite") or ""),
    )


def _translate_field_errors(raw: dict[str, Any]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, msg in raw.items():
        field = WIRE_FIELDS.get(str(key), str(key))
        if isinstance(msg, list):
            msg = " ".join(str(m) for m in msg)
        out[field] = str(msg)
    return out


def raise_for_response(response: httpx.Response, default_message: str) -> None:
    """
    Classify a non-2xx response into the TaskApiError hierarchy.

    - 400 with an "errors" object -> MalformedInputError
    - 409 -> ConflictError
    - 404 -> NotFoundError
    - anything else -> TaskApiError with body["error"] or the default message
    """
    if response.is_success:
        return

    status = response.status_code
    body = _safe_json(response)
    if not isinstance(body, dict):
        body = {}

    raw_message = body.get("error")
    message = str(raw_message) if isinstance(raw_message, str) and raw_message.strip() else default_message

    errors = body.get("errors")
    if status == 400 and isinstance(errors, dict) and errors:
        raise MalformedInputError(_translate_field_errors(errors), message, status_code=status)
    if status == 409:
        raise ConflictError(message, status_code=status)
    if status == 404:
        raise NotFoundError(message, status_code=status)
    raise TaskApiError(message, status_code=status)


class HttpTaskApi:
    """
    TaskApi over the REST resource.

    GET/POST {tasks_path}, PUT/DELETE {tasks_path}/{id}, PATCH {tasks_path}/{id}/mover.
    Transport failures are reported as TaskApiError with the operation's default message.
    """

    def __init__(self, settings: Any, *, client: httpx.AsyncClient | None = None) -> None:
        base_url = str(getattr(settings, "api_base_url", "") or "").rstrip("/")
        self._tasks_path = str(getattr(settings, "tasks_path", "/api/tarefas") or "/api/tarefas")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=_make_timeout(settings),
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _item_path(self, task_id: TaskId, suffix: str = "") -> str:
        return f"{self._tasks_path}/{task_id}{suffix}"

    async def _request(
        self,
        method: str,
        path: str,
        default_message: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.info("%s %s transport error: %s", method, path, e.__class__.__name__)
            raise TaskApiError(default_message) from e
        except ValueError as e:
            # payload could not be encoded as JSON
            logger.info("%s %s request not encodable: %s", method, path, e)
            raise TaskApiError(default_message) from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        raise_for_response(response, default_message)
        return response

    async def fetch_all(self) -> list[Task]:
        response = await self._request("GET", self._tasks_path, LOAD_ERROR)
        try:
            data = response.json()
        except ValueError as e:
            # A garbled success body must not wipe the list.
            logger.info("GET %s returned an undecodable body", self._tasks_path)
            raise TaskApiError(LOAD_ERROR, status_code=response.status_code) from e
        if not isinstance(data, list):
            return []
        tasks: list[Task] = []
        for raw in data:
            task = parse_task(raw)
            if task is None:
                logger.debug("Skipping task without id: %r", raw)
                continue
            tasks.append(task)
        return tasks

    async def create(self, *, name: str, cost: Decimal, due_date: str) -> Task | None:
        payload = {"nome": name, "custo": float(cost), "data_limite": due_date}
        response = await self._request("POST", self._tasks_path, SAVE_ERROR, json=payload)
        return parse_task(_safe_json(response))

    async def update(
        self, task_id: TaskId, *, name: str, cost: Decimal, due_date: str
    ) -> Task | None:
        payload = {"nome": name, "custo": float(cost), "data_limite": due_date}
        response = await self._request("PUT", self._item_path(task_id), SAVE_ERROR, json=payload)
        return parse_task(_safe_json(response))

    async def delete(self, task_id: TaskId) -> None:
        await self._request("DELETE", self._item_path(task_id), DELETE_ERROR)

    async def move(self, task_id: TaskId, direction: MoveDirection) -> None:
        await self._request(
            "PATCH",
            self._item_path(task_id, "/mover"),
            MOVE_ERROR,
            json={"direction": direction.value},
        )
