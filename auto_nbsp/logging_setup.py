from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from auto_nbsp.settings import LogSettings, log_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class AutoNbspFileHandler(RotatingFileHandler):
    """The package's log file; at most one is attached to the root logger."""

    def __init__(self, settings: LogSettings) -> None:
        super().__init__(
            settings.log_file,
            maxBytes=settings.max_bytes,
            backupCount=settings.backups,
            encoding="utf-8",
            delay=True,
        )
        self.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))


def ensure_file_logging(settings: LogSettings | None = None) -> Path | None:
    """Apply ``settings`` to the root logger and return the log file in use.

    Returns ``None`` when file logging is disabled. A second call keeps the
    handler that is already attached, so uvicorn reloads do not duplicate lines.
    """

    settings = settings or log_settings()
    root = logging.getLogger()
    if settings.level:
        root.setLevel(settings.level)
    if not settings.file_enabled:
        return None

    handler = next((h for h in root.handlers if isinstance(h, AutoNbspFileHandler)), None)
    if handler is None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handler = AutoNbspFileHandler(settings)
        root.addHandler(handler)
    return Path(handler.baseFilename)
