"""Reusable widgets for the task form."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from tasklist.providers import Task
from tasklist.rules import format_cost, format_deadline, is_high_cost


class TaskRow(Static):
    """Single task with its edit/delete/move controls."""

    DEFAULT_CSS = """
    TaskRow {
        height: auto;
        border: solid $primary;
        padding: 0 1;
        margin-bottom: 1;
        layout: horizontal;
    }

    TaskRow.high-cost {
        background: $primary-darken-3;
        border: solid $accent;
    }

    TaskRow .details {
        width: 1fr;
        height: auto;
    }

    TaskRow .task-name {
        text-style: bold;
        color: $accent;
    }

    TaskRow .controls {
        width: auto;
        height: auto;
    }

    TaskRow Button {
        min-width: 5;
        margin-left: 1;
    }
    """

    class ActionRequested(Message):
        """Posted when one of the row's buttons is pressed."""

        def __init__(self, row_task: Task, command: str) -> None:
            super().__init__()
            self.row_task = row_task
            self.command = command

    def __init__(
        self, item: Task, first: bool = False, last: bool = False, **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self._item = item
        self._first = first
        self._last = last
        if is_high_cost(item):
            self.add_class("high-cost")

    @property
    def item(self) -> Task:
        return self._item

    def compose(self) -> ComposeResult:
        with Vertical(classes="details"):
            yield Label(self._item.name, classes="task-name", markup=False)
            yield Label(f"Custo: {format_cost(self._item.cost)}", markup=False)
            yield Label(f"Data Limite: {format_deadline(self._item.deadline)}")
        with Horizontal(classes="controls"):
            yield Button("✎", name="edit")
            yield Button("🗑", name="delete")
            yield Button("▲", name="up", disabled=self._first)
            yield Button("▼", name="down", disabled=self._last)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.ActionRequested(self._item, event.button.name or ""))


class ConfirmDialog(ModalScreen[bool]):
    """Yes/no prompt; dismisses with the user's answer."""

    DEFAULT_CSS = """
    ConfirmDialog {
        align: center middle;
    }

    ConfirmDialog > Vertical {
        width: 50;
        height: auto;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
    }

    ConfirmDialog .buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }

    ConfirmDialog Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        ("y", "answer(True)", "Sim"),
        ("n", "answer(False)", "Não"),
        ("escape", "answer(False)", "Cancelar"),
    ]

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self._message)
            with Horizontal(classes="buttons"):
                yield Button("Sim", id="confirm-yes", variant="error")
                yield Button("Não", id="confirm-no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-yes")

    def action_answer(self, value: bool) -> None:
        self.dismiss(value)
