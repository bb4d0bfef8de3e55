from typing import Optional

from loguru import logger as _loguru_logger

from .loguru_config import _standardize_name, setup_loguru


_LOGGER_INITIALIZED = False


def setup_logger(name="Soundboard", log_file: Optional[str] = "soundboard_web.log", level="INFO", enqueue=True):
    """Set up application logging for the Flask app (idempotent)."""
    global _LOGGER_INITIALIZED

    if _LOGGER_INITIALIZED:
        return get_logger(name)

    setup_loguru(log_level=level, log_file=log_file, logger_name=name, enqueue=enqueue)
    _LOGGER_INITIALIZED = True

    app_logger = get_logger(name)
    app_logger.debug(f"Logging initialized - level={level} file={log_file}")
    return app_logger


def get_module_logger(module_name: str):
    """Get a logger for a specific module that uses standardized naming."""
    return _loguru_logger.bind(logger_name=_standardize_name(module_name))


def get_logger(name="Soundboard"):
    """Get the application logger."""
    return get_module_logger(name)
