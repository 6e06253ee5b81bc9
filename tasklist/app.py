"""
Task list TUI application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from tasklist.api_provider import HttpTaskAPI
from tasklist.config import Settings
from tasklist.controller import TaskFormController
from tasklist.logging_setup import setup_logging
from tasklist.providers import TaskAPI
from tasklist.views.task_form import TaskFormScreen
from tasklist.views.widgets import ConfirmDialog

logger = logging.getLogger(__name__)


class TaskListApp(App):
    """Main task list application."""

    TITLE = "Tarefas"
    SUB_TITLE = "Lista de tarefas"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Sair", show=True),
        Binding("d", "toggle_dark", "Claro/Escuro", show=True),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        api: TaskAPI | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._settings = settings or Settings.from_env()
        self._owns_api = api is None
        self._api: TaskAPI = api or HttpTaskAPI(
            self._settings.api_base_url,
            timeout=self._settings.request_timeout,
        )
        self.controller = TaskFormController(self._api, self.confirm)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        logger.info("Using task API at %s", self._settings.api_base_url)
        self.push_screen(TaskFormScreen(self.controller))

    async def on_unmount(self) -> None:
        if self._owns_api and isinstance(self._api, HttpTaskAPI):
            await self._api.aclose()

    async def confirm(self, message: str) -> bool:
        """Ask a yes/no question in a modal; must run inside a worker."""
        return bool(await self.push_screen_wait(ConfirmDialog(message)))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Terminal task list synchronized with a remote task API",
    )
    parser.add_argument("--api-url", help="Base URL of the task API")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level for the log file",
    )
    parser.add_argument("--log-dir", type=Path, help="Directory for tasklist.log")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the TUI application."""
    args = _parse_args(argv)
    settings = Settings.from_env().with_overrides(
        api_base_url=args.api_url.rstrip("/") if args.api_url else None,
        request_timeout=args.timeout,
        log_level=args.log_level,
        log_dir=args.log_dir,
    )

    level = getattr(logging, settings.log_level, logging.INFO)
    log_file = setup_logging(log_dir=settings.log_dir, level=level)
    logger.info("Starting tasklist (log file: %s)", log_file)

    app = TaskListApp(settings=settings)
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
