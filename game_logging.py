"""
game_logging.py

Logging setup for Grid Recall.

Modules log through logging.getLogger(__name__). configure_logging() installs handlers on the
root logger once per process:
- console handler on stdout, ANSI colored by level
- optional file handler under the user log dir, one timestamped file per session

Line format: [time] [LEVEL] [logger] message
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Bracketed formatter. Colors are for terminals only."""

    COLORS = {
        "DEBUG": "\033[94m",
        "INFO": "\033[92m",
        "WARNING": "\033[93m",
        "ERROR": "\033[91m",
        "CRITICAL": "\033[95m",
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False) -> None:
        super().__init__("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s")
        self.use_colors = bool(use_colors)

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            formatted = f"{color}{formatted}{self.COLORS['RESET']}"
        return formatted


_HANDLER_MARKER = "_grid_recall_handler"


def configure_logging(
    level: str = "INFO",
    *,
    log_dir: Optional[Path] = None,
    use_colors: bool = True,
) -> Optional[Path]:
    """Install console (and optionally file) handlers. Returns the log file path, if any."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).strip().upper(), logging.INFO))

    # Replace handlers from a previous call so repeated setup does not duplicate lines.
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(use_colors=use_colors and sys.stdout.isatty()))
    setattr(console_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = Path(log_dir) / f"grid_recall_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(ColoredFormatter(use_colors=False))
    setattr(file_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(file_handler)
    return log_path
