"""
Data types and capability protocols for the task form.

Protocols define the interface; implementations can be swapped
for testing or alternative backends.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TaskAPIError(Exception):
    """Raised when the remote Task API cannot complete a request."""


class DraftError(ValueError):
    """Raised when a draft does not satisfy the form's field constraints."""


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of a backend-owned task.

    ``cost`` stays as the decimal text the backend sends; it is parsed
    only for comparisons and payloads.
    """

    id: int
    name: str
    cost: str
    deadline: str


@dataclass(frozen=True)
class Draft:
    """Unsaved form contents, optionally bound to the task being edited."""

    name: str = ""
    cost: str = ""
    deadline: str = ""
    editing_id: int | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.cost or self.deadline)


class FormState(Enum):
    """Lifecycle of the draft."""

    IDLE = "idle"
    DRAFTING = "drafting"
    EDITING = "editing"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a backend-touching operation, surfaced to the view."""

    ok: bool
    error: str | None = None
    cancelled: bool = False

    @classmethod
    def success(cls) -> "OperationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "OperationResult":
        return cls(ok=False, error=error)

    @classmethod
    def declined(cls) -> "OperationResult":
        return cls(ok=False, cancelled=True)


ConfirmFn = Callable[[str], Awaitable[bool]]


class TaskAPI(Protocol):
    """Protocol for the remote task store."""

    async def list_tasks(self) -> list[Task]:
        """Fetch the full task collection in backend order."""
        ...

    async def create_task(self, payload: dict) -> None:
        """Create a task; the backend assigns its id."""
        ...

    async def update_task(self, task_id: int, payload: dict) -> None:
        """Replace the fields of an existing task."""
        ...

    async def delete_task(self, task_id: int) -> None:
        """Remove a task."""
        ...
