"""Logging configuration."""

import logging
from pathlib import Path

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second call replaces only those.
_HANDLER_TAG = "_task_api_handler"


def setup_logging(*, level: str | int = "INFO", log_dir: str | Path | None = None) -> None:
    """
    Configure root logging with:
    - Console handler: rich output at ``level``
    - File handlers (only when ``log_dir`` is given): everything in
      ``task_api.log``, errors only in ``error.log``
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)
            h.close()

    handlers: list[logging.Handler] = []

    console = RichHandler(rich_tracebacks=True, show_path=False, log_time_format="[%X]")
    console.setLevel(level)
    handlers.append(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fmt = logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT)

        combined = logging.FileHandler(log_dir / "task_api.log", encoding="utf-8")
        combined.setLevel(logging.DEBUG)
        combined.setFormatter(fmt)
        handlers.append(combined)

        errors = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        errors.setLevel(logging.ERROR)
        errors.setFormatter(fmt)
        handlers.append(errors)

    for h in handlers:
        setattr(h, _HANDLER_TAG, True)
        root.addHandler(h)

    root.setLevel(logging.DEBUG if log_dir is not None else level)
    logging.captureWarnings(True)
