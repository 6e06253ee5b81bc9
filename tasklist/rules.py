"""Pure helpers for cost, deadline and ordering rules used by the task form."""

import math
import re
from datetime import date, datetime
from typing import Literal, Sequence

from tasklist.providers import Draft, DraftError, Task

HIGH_COST_THRESHOLD = 1000

Direction = Literal["up", "down"]


DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(T.*)?$")


def parse_cost(text: str) -> float:
    """Parse plain decimal cost text; anything else gives NaN.

    Underscore separators, ``inf`` and ``nan`` spellings are not costs.
    """
    cleaned = str(text).strip()
    if not DECIMAL_RE.match(cleaned):
        return math.nan
    value = float(cleaned)
    return value if math.isfinite(value) else math.nan


def is_high_cost(task: Task) -> bool:
    """Tasks costing at least HIGH_COST_THRESHOLD get distinct treatment."""
    return parse_cost(task.cost) >= HIGH_COST_THRESHOLD


def parse_deadline(value: str) -> date | None:
    """Calendar date of an ISO date or datetime string, as stored."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except (ValueError, TypeError):
        return None


def format_deadline(value: str) -> str:
    """Format a deadline as DD/MM/YYYY; unparseable input is shown as-is."""
    parsed = parse_deadline(value)
    if parsed is None:
        return value
    return parsed.strftime("%d/%m/%Y")


def format_cost(cost: str) -> str:
    return f"R$ {cost}"


def move_task(
    tasks: Sequence[Task], task_id: int, direction: Direction
) -> tuple[Task, ...]:
    """Return a new sequence with ``task_id`` moved one slot up or down.

    The insertion index is clamped, so moving the first task up or the
    last task down yields the same order. Unknown ids are ignored.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Unknown direction: {direction!r}")

    items = list(tasks)
    index = next((i for i, t in enumerate(items) if t.id == task_id), None)
    if index is None:
        return tuple(items)

    moved = items.pop(index)
    target = index - 1 if direction == "up" else index + 1
    target = max(0, min(target, len(items)))
    items.insert(target, moved)
    return tuple(items)


def build_payload(draft: Draft) -> dict:
    """Request body for create/update.

    Raises:
        DraftError: if a required field is blank, the cost is not a
            finite number, or the deadline is not an ISO date.
    """
    name = draft.name.strip()
    if not name:
        raise DraftError("Informe o nome da tarefa.")

    cost = parse_cost(draft.cost)
    if not math.isfinite(cost):
        raise DraftError("Informe um custo numérico válido.")

    if not DATE_RE.match(draft.deadline) or parse_deadline(draft.deadline) is None:
        raise DraftError("Informe uma data limite válida (AAAA-MM-DD).")

    return {"name": draft.name, "cost": cost, "deadline": draft.deadline}
