"""Logging setup for the command-line entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

# Handlers added by setup_logging; other root handlers are left alone
_installed_handlers: list[logging.Handler] = []


def reset_logging() -> None:
    """Remove and close every handler installed by setup_logging."""
    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    *,
    console_level: int = logging.WARNING,
    file_path: Optional[Union[str, Path]] = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Configure the root logger with a stderr handler and an optional file handler.

    Handlers from an earlier call are closed and replaced, so calling this twice
    neither duplicates output nor leaks the previous log file.

    Args:
        console_level: Level for the stderr handler
        file_path: Optional log file; parent directories are created
        file_level: Level for the file handler
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(min(console_level, file_level) if file_path else console_level)

    formatter = logging.Formatter(LOG_FORMAT)

    # stdout carries the result, so log to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if file_path:
        path_obj = Path(file_path)
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path_obj, mode='w', encoding='utf-8')
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _installed_handlers.append(file_handler)
