"""
View-state controller for the task form.

Owns the task cache and the draft, and synchronizes both with a TaskAPI.
Nothing here touches Textual, so every operation can be driven from tests
with fakes for the API and the confirmation prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from functools import partial

from tasklist.providers import (
    ConfirmFn,
    Draft,
    DraftError,
    FormState,
    OperationResult,
    Task,
    TaskAPI,
    TaskAPIError,
)
from tasklist.rules import Direction, build_payload, move_task

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Tem certeza de que deseja deletar esta tarefa?"
BUSY_MESSAGE = "Aguarde a operação em andamento terminar."


class TaskFormController:
    """Draft and task-list state kept in sync with the remote store."""

    def __init__(self, api: TaskAPI, confirm: ConfirmFn) -> None:
        self._api = api
        self._confirm = confirm
        self.tasks: tuple[Task, ...] = ()
        self.draft = Draft()
        self.last_error: str | None = None
        self.busy = False

    @property
    def state(self) -> FormState:
        if self.draft.editing_id is not None:
            return FormState.EDITING
        if self.draft.is_empty:
            return FormState.IDLE
        return FormState.DRAFTING

    # -------------------- local operations --------------------

    def update_draft(self, **fields: str) -> None:
        """Apply input changes; editing_id is not an input field."""
        unknown = set(fields) - {"name", "cost", "deadline"}
        if unknown:
            raise TypeError(f"Unknown draft fields: {sorted(unknown)}")
        self.draft = replace(self.draft, **fields)

    def begin_edit(self, task: Task) -> None:
        """Load a task into the draft, discarding any unsaved input."""
        self.draft = Draft(
            name=task.name,
            cost=task.cost,
            deadline=task.deadline,
            editing_id=task.id,
        )

    def cancel_edit(self) -> None:
        self.draft = Draft()

    def reorder(self, task_id: int, direction: Direction) -> tuple[Task, ...]:
        """Move a task locally; the next refresh restores backend order."""
        self.tasks = move_task(self.tasks, task_id, direction)
        return self.tasks

    # -------------------- backend operations --------------------

    async def _run(
        self, action: str, call: Callable[[], Awaitable[None]]
    ) -> OperationResult:
        if self.busy:
            logger.debug("Rejected %s: another request in flight", action)
            return OperationResult.failure(BUSY_MESSAGE)

        self.busy = True
        try:
            await call()
        except TaskAPIError as exc:
            logger.warning("%s failed: %s", action, exc)
            self.last_error = str(exc)
            return OperationResult.failure(str(exc))
        finally:
            self.busy = False

        self.last_error = None
        return OperationResult.success()

    async def _fetch(self) -> None:
        self.tasks = tuple(await self._api.list_tasks())
        logger.debug("Loaded %d tasks", len(self.tasks))

    async def refresh(self) -> OperationResult:
        """Replace the cache with the backend's collection.

        On failure the previous cache is kept and the error is surfaced.
        """
        return await self._run("refresh", self._fetch)

    async def submit(self) -> OperationResult:
        """Create or update depending on whether a task is being edited."""
        try:
            payload = build_payload(self.draft)
        except DraftError as exc:
            self.last_error = str(exc)
            return OperationResult.failure(str(exc))

        editing_id = self.draft.editing_id
        if editing_id is None:
            action = "create"
            mutate = partial(self._api.create_task, payload)
        else:
            action = f"update {editing_id}"
            mutate = partial(self._api.update_task, editing_id, payload)

        result = await self._run(action, mutate)
        if not result.ok:
            return result

        logger.info("Saved task (%s)", action)
        refreshed = await self.refresh()
        self.draft = Draft()
        return refreshed

    async def remove(
        self, task_id: int, on_confirmed: Callable[[], None] | None = None
    ) -> OperationResult:
        """Delete a task after the user confirms.

        ``on_confirmed`` runs once the user accepts, before the request.
        """
        if self.busy:
            return OperationResult.failure(BUSY_MESSAGE)
        if not await self._confirm(DELETE_PROMPT):
            return OperationResult.declined()
        if on_confirmed is not None:
            on_confirmed()

        result = await self._run(
            f"delete {task_id}", partial(self._api.delete_task, task_id)
        )
        if not result.ok:
            return result

        logger.info("Deleted task %s", task_id)
        if self.draft.editing_id == task_id:
            self.draft = Draft()
        return await self.refresh()
