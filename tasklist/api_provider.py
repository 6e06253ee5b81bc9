"""
Concrete implementation of TaskAPI over HTTP using httpx.
"""

from __future__ import annotations

import logging

import httpx

from tasklist.providers import Task, TaskAPIError

logger = logging.getLogger(__name__)

TASKS_PATH = "/tarefas"


def _task_from_dict(data: dict) -> Task:
    """Convert a task payload to Task."""
    try:
        task_id = int(data["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise TaskAPIError(f"Tarefa sem id válido: {data!r}") from exc

    cost = data.get("cost", "")
    return Task(
        id=task_id,
        name=str(data.get("name", "")),
        cost="" if cost is None else str(cost),
        deadline=str(data.get("deadline", "") or ""),
    )


class HttpTaskAPI:
    """TaskAPI implementation talking to the ``/tarefas`` REST endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "HttpTaskAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _url(self, task_id: int | None = None) -> str:
        if task_id is None:
            return f"{self._base_url}{TASKS_PATH}"
        return f"{self._base_url}{TASKS_PATH}/{task_id}"

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, url)
            raise TaskAPIError("O servidor demorou demais para responder.") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("%s %s failed with status %s", method, url, status)
            raise TaskAPIError(f"O servidor respondeu com erro {status}.") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TaskAPIError("Não foi possível conectar ao servidor.") from exc
        return response

    async def list_tasks(self) -> list[Task]:
        """Fetch the full task collection in backend order."""
        response = await self._request("GET", self._url())
        try:
            data = response.json()
        except ValueError as exc:
            raise TaskAPIError("Resposta inválida do servidor.") from exc

        if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
            raise TaskAPIError("Resposta inválida do servidor.")
        return [_task_from_dict(item) for item in data]

    async def create_task(self, payload: dict) -> None:
        await self._request("POST", self._url(), json=payload)

    async def update_task(self, task_id: int, payload: dict) -> None:
        await self._request("PUT", self._url(task_id), json=payload)

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", self._url(task_id))
