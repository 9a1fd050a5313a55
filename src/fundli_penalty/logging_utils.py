"""Logging setup shared by the API server and command-line entry points."""

from __future__ import annotations

import logging
import os
from datetime import datetime

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    name: str,
    level: int | str = logging.INFO,
    log_to_file: bool = False,
    log_dir: str = "logs",
    log_file: str | None = None,
) -> logging.Logger:
    """Set up a logger with a console handler and an optional file handler.

    Parameters
    ----------
    name : str
        Logger name, usually the top-level package (``"fundli_penalty"``).
    level : int | str
        Logging level, either numeric or a name such as ``"DEBUG"``.
    log_to_file : bool
        Also write to ``log_dir/log_file``.
    log_dir : str
        Directory for log files; created if missing.
    log_file : str | None
        File name. Defaults to ``<name>_<timestamp>.log``.

    Returns
    -------
    logging.Logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Handlers are attached once per logger; repeated calls only adjust level.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"{name}_{timestamp}.log"
        file_handler = logging.FileHandler(os.path.join(log_dir, log_file))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
