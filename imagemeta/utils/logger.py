# ==================================================
# ================ Logger Utilities ================
# ==================================================
"""Package loggers.

Every logger lives under the ``imagemeta`` namespace, never propagates to the
root logger and is configured once: later calls with the same name only
adjust its level. Console output goes to stderr; a daily rotating file is
added when a log directory is given.
"""
from __future__ import annotations

import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

# Public API
__all__ = ["LOGGER_PREFIX", "make_file_handler", "get_logger", "get_error_logger", "set_level"]

PathLike = Union[str, Path]

# ====[ Global logging configuration ]====
LOGGER_PREFIX: str = "imagemeta"
_FORMATTER = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _qualified(name: str) -> str:
    """Nest `name` under ``imagemeta`` unless it already is."""
    if name == LOGGER_PREFIX or name.startswith(LOGGER_PREFIX + "."):
        return name
    return f"{LOGGER_PREFIX}.{name}"


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def _daily_log_path(log_dir: PathLike, stem: str) -> Path:
    return Path(log_dir) / f"{stem}_{datetime.now():%Y-%m-%d}.log"


def _prepare(name: str, level: int) -> tuple[logging.Logger, bool]:
    """Fetch the named logger; the flag tells whether it still needs handlers."""
    logger = logging.getLogger(_qualified(name))
    logger.propagate = False
    fresh = not logger.handlers
    _apply_level(logger, level)
    return logger, fresh


# ====[ File handler ]====
def make_file_handler(
    log_path: PathLike,
    level: int,
    when: str = "midnight",
    backupCount: int = 7,
    encoding: str = "utf-8",
    interval: int = 1,
) -> TimedRotatingFileHandler:
    """
    Rotating file handler with the package formatter.

    The parent directory is created if needed and the file is only opened on
    the first record. `when`, `interval` and `backupCount` are passed to
    :class:`logging.handlers.TimedRotatingFileHandler`.
    """
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(path),
        when=when,
        interval=interval,
        backupCount=backupCount,
        encoding=encoding,
        delay=True,
    )
    handler.setLevel(level)
    handler.setFormatter(_FORMATTER)
    return handler


# ==================================================
# ================ Logger Factory ==================
# ==================================================
def get_logger(
    name: str = LOGGER_PREFIX,
    log_dir: Optional[PathLike] = None,
    level: int = logging.INFO,
    when: str = "midnight",
    backupCount: int = 7,
) -> logging.Logger:
    """
    Console logger for a package module, optionally mirrored to a daily file.

    Parameters
    ----------
    name : str
        Usually ``__name__``; nested under ``imagemeta`` when needed.
    log_dir : str or Path, optional
        Directory of the ``<logger name>_<date>.log`` file. Only honoured the
        first time a given logger is requested.
    level : int
        Level of the logger and of all its handlers.
    when, backupCount
        Rotation settings of the file handler.
    """
    logger, fresh = _prepare(name, level)
    if fresh:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(_FORMATTER)
        logger.addHandler(console)
        if log_dir is not None:
            path = _daily_log_path(log_dir, logger.name)
            logger.addHandler(make_file_handler(path, level, when=when, backupCount=backupCount))
    return logger


def get_error_logger(
    name: str = "errors",
    log_dir: Optional[PathLike] = None,
    level: int = logging.ERROR,
    backupCount: int = 30,
) -> logging.Logger:
    """
    File-only logger for failures of public operations.

    Records go to ``errors_<date>.log`` in `log_dir`. Without a directory the
    logger gets a :class:`logging.NullHandler`, so nothing reaches the console.
    """
    logger, fresh = _prepare(name, level)
    if fresh:
        if log_dir is None:
            logger.addHandler(logging.NullHandler())
        else:
            path = _daily_log_path(log_dir, "errors")
            logger.addHandler(make_file_handler(path, level, backupCount=backupCount))
    return logger


def set_level(level: int, name: str = LOGGER_PREFIX) -> None:
    """Change the level of a package logger and of its handlers."""
    _apply_level(logging.getLogger(_qualified(name)), level)
