from __future__ import annotations

import logging
from pathlib import Path

from textual.logging import TextualHandler


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    level: int = logging.INFO,
) -> Path:
    """
    Configure logging with:
    - File handler: full logs for debugging (the terminal belongs to the TUI)
    - Textual handler: mirrors records to the devtools console when attached

    Call this ONCE, before the app starts. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "tasklist.log"

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    th = TextualHandler()
    th.setLevel(level)
    th.setFormatter(fmt)
    root.addHandler(th)

    logging.captureWarnings(True)

    # Request lines are logged by tasklist.api_provider already.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
