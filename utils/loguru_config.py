"""
Module Name: loguru_config.py
Description:
    Logging sinks for the soundboard. Writes coloured lines to stdout and,
    unless disabled, a size-rotated file under logs/. Records emitted through
    the standard logging module (Flask, werkzeug, pymongo) are forwarded to
    Loguru so every line carries a dotted ``logger_name`` such as
    ``Routes.Main``.

Location:
    /utils/loguru_config.py

"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

DEFAULT_LOGGER_NAME = "Soundboard"
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

# Standard-library loggers that only matter at WARNING and above
QUIET_LOGGERS = ("pymongo", "werkzeug")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
    "| <level>{level: <8}</level> "
    "| <cyan>{extra[logger_name]}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} - {level} - {extra[logger_name]} - {message}"

_NAME_SEPARATORS = re.compile(r"[\\/_.\s]+")


def _standardize_name(raw_name: Union[str, int]) -> str:
    """``routes/main`` and ``sound_feed`` become ``Routes.Main`` and ``Sound.Feed``."""
    if isinstance(raw_name, int):
        return str(raw_name)
    segments = [segment for segment in _NAME_SEPARATORS.split(str(raw_name or "")) if segment]
    if not segments:
        return DEFAULT_LOGGER_NAME
    return ".".join(segment[0].upper() + segment[1:] for segment in segments)


class InterceptHandler(logging.Handler):
    """Forward standard logging records to Loguru under their dotted name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past logging's own frames so Loguru reports the caller
        frame, depth = logging.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.bind(logger_name=_standardize_name(record.name)).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _coerce_level(level: Union[str, int, None]) -> Union[str, int]:
    if isinstance(level, str):
        return level.strip().upper() or "INFO"
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        return "INFO"


def setup_loguru(
    log_level: Union[str, int] = "INFO",
    log_file: Optional[str] = "soundboard_web.log",
    logger_name: str = DEFAULT_LOGGER_NAME,
    enqueue: bool = True,
):
    """Replace existing sinks and route standard logging through Loguru.

    ``log_file=None`` keeps output on stdout only. ``enqueue=False`` writes
    synchronously, which tests rely on to read records straight away.
    """
    level = _coerce_level(log_level)
    shared = {"level": level, "enqueue": enqueue, "backtrace": False, "diagnose": False}

    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, colorize=True, **shared)

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_DIR / log_file,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
            **shared,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.NOTSET, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.configure(extra={"logger_name": _standardize_name(logger_name)})
    return logger
