"""Task form screen: draft inputs plus the synchronized task list."""

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Label, Static

from tasklist.controller import TaskFormController
from tasklist.providers import FormState, OperationResult
from tasklist.views.header import LogoHeader
from tasklist.views.widgets import TaskRow

TITLE_NEW = "Inserir Atividade"
TITLE_EDIT = "Editar Atividade"
SUBMIT_NEW = "Adicionar Tarefa"
SUBMIT_EDIT = "Atualizar Tarefa"
EMPTY_MESSAGE = "Nenhuma tarefa inserida ainda."

DRAFT_FIELDS = ("name", "cost", "deadline")


class TaskFormScreen(Screen):
    """Form for composing/editing a task, above the list of saved tasks."""

    BINDINGS = [
        ("r", "refresh", "Atualizar"),
        ("escape", "cancel_edit", "Cancelar edição"),
    ]

    DEFAULT_CSS = """
    TaskFormScreen {
        layout: vertical;
    }

    #body {
        height: 1fr;
    }

    #form-panel {
        width: 1fr;
        height: auto;
        border: solid $primary;
        padding: 1;
        margin: 1;
    }

    #list-panel {
        width: 1fr;
        border: solid $primary;
        padding: 1;
        margin: 1;
    }

    .title {
        text-style: bold;
        margin-bottom: 1;
    }

    #form-actions {
        height: auto;
        margin-top: 1;
    }

    #form-actions Button {
        margin-right: 1;
    }

    #error-banner {
        color: $error;
        margin-top: 1;
    }

    .empty {
        color: $text-muted;
    }
    """

    def __init__(self, controller: TaskFormController, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def compose(self) -> ComposeResult:
        yield LogoHeader()
        with Horizontal(id="body"):
            with Vertical(id="form-panel"):
                yield Label(TITLE_NEW, id="form-title", classes="title")
                yield Label("Nome da Tarefa")
                yield Input(placeholder="Digite o nome da tarefa", id="name")
                yield Label("Custo (R$)")
                yield Input(placeholder="Digite o custo em R$", type="number", id="cost")
                yield Label("Data Limite")
                yield Input(placeholder="AAAA-MM-DD", id="deadline")
                with Horizontal(id="form-actions"):
                    yield Button(SUBMIT_NEW, id="submit", variant="primary")
                    yield Button("Cancelar", id="cancel")
                yield Static("", id="error-banner")
            with Vertical(id="list-panel"):
                yield Label("Tarefas Inseridas", classes="title")
                yield VerticalScroll(id="task-list")
        yield Footer()

    async def on_mount(self) -> None:
        self._sync_form()
        self.refresh_tasks()

    # -------------------- rendering --------------------

    def _sync_form(self) -> None:
        """Push the controller's draft and mode into the widgets."""
        draft = self._controller.draft
        for field in DRAFT_FIELDS:
            field_input = self.query_one(f"#{field}", Input)
            value = getattr(draft, field)
            if field_input.value != value:
                field_input.value = value

        editing = self._controller.state is FormState.EDITING
        self.query_one("#form-title", Label).update(TITLE_EDIT if editing else TITLE_NEW)
        self.query_one("#submit", Button).label = SUBMIT_EDIT if editing else SUBMIT_NEW
        self.query_one("#cancel", Button).display = editing
        self._show_error(self._controller.last_error)

    def _show_error(self, error: str | None) -> None:
        banner = self.query_one("#error-banner", Static)
        banner.update(error or "")
        banner.display = bool(error)

    async def _render_tasks(self) -> None:
        task_list = self.query_one("#task-list", VerticalScroll)
        await task_list.remove_children()

        tasks = self._controller.tasks
        if not tasks:
            await task_list.mount(Label(EMPTY_MESSAGE, classes="empty"))
            return

        last = len(tasks) - 1
        await task_list.mount_all(
            TaskRow(task, first=index == 0, last=index == last)
            for index, task in enumerate(tasks)
        )

    def _set_busy(self, busy: bool) -> None:
        self.query_one("#form-panel").disabled = busy
        self.query_one("#task-list").disabled = busy

    async def _after(self, result: OperationResult, success_note: str | None = None) -> None:
        self._sync_form()
        if result.error:
            self._show_error(result.error)
        elif result.ok and success_note:
            self.notify(success_note)
        await self._render_tasks()

    # -------------------- workers --------------------

    @work(group="api")
    async def refresh_tasks(self) -> None:
        self._set_busy(True)
        try:
            result = await self._controller.refresh()
        finally:
            self._set_busy(False)
        await self._after(result)

    @work(group="api")
    async def submit_draft(self) -> None:
        saved_note = (
            "Tarefa atualizada."
            if self._controller.state is FormState.EDITING
            else "Tarefa adicionada."
        )
        self._set_busy(True)
        try:
            result = await self._controller.submit()
        finally:
            self._set_busy(False)
        await self._after(result, saved_note)
        if result.ok:
            self.query_one("#name", Input).focus()

    @work(group="api")
    async def delete_task(self, task_id: int) -> None:
        # Controls stay enabled until the user confirms.
        try:
            result = await self._controller.remove(
                task_id, on_confirmed=lambda: self._set_busy(True)
            )
        finally:
            self._set_busy(False)
        if result.cancelled:
            return
        await self._after(result, "Tarefa removida.")

    # -------------------- events --------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id in DRAFT_FIELDS:
            self._controller.update_draft(**{event.input.id: event.value})

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.submit_draft()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.submit_draft()
        elif event.button.id == "cancel":
            self.action_cancel_edit()

    async def on_task_row_action_requested(self, event: TaskRow.ActionRequested) -> None:
        task = event.row_task
        if event.command == "edit":
            self._controller.begin_edit(task)
            self._sync_form()
            self.query_one("#name", Input).focus()
        elif event.command == "delete":
            self.delete_task(task.id)
        elif event.command in ("up", "down"):
            self._controller.reorder(task.id, event.command)
            await self._render_tasks()

    # -------------------- actions --------------------

    def action_refresh(self) -> None:
        self.refresh_tasks()

    def action_cancel_edit(self) -> None:
        self._controller.cancel_edit()
        self._sync_form()
