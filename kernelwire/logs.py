"""Logger creation for the system's modules."""

from __future__ import annotations

import logging
import sys
from os import PathLike
from typing import Union

_FORMAT = "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def create_logger(log_file: Union[str, "PathLike[str]"], module_name: str) -> logging.Logger:
    """Create an INFO-level logger writing to ``log_file`` and to the console.

    Raises ``OSError`` when the log file cannot be opened.
    """
    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise OSError(f"could not create the logger for module {module_name}: {exc}") from exc

    logger = logging.getLogger(module_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, _DATE_FORMAT)
    console_handler = logging.StreamHandler(sys.stdout)
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger