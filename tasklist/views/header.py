"""Branding bar shown above the task form."""

from textual.widgets import Static

LOGO = "✔ tarefas"


class LogoHeader(Static):
    """Static application logo."""

    DEFAULT_CSS = """
    LogoHeader {
        width: 100%;
        height: 3;
        content-align: center middle;
        background: $background-darken-1;
        color: $accent;
        text-style: bold;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(LOGO, **kwargs)
