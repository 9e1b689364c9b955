import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import LOG_FILE, LOG_LEVEL

_LOGGER_NAME = "frontdesk_console"
_LOG_FILE = Path(LOG_FILE)


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False

    try:
        handler = RotatingFileHandler(_LOG_FILE, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        handler = logging.StreamHandler()

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


_logger = _configure_logger()


def _format_message(area: str, accion: str, detalle: str) -> str:
    message = f"{area.upper()} | Accion: {accion}"
    if detalle:
        message += f" | Detalle: {detalle}"
    return message


def log_event(area: str, accion: str, detalle: str = "") -> None:
    _logger.info(_format_message(area, accion, detalle))


def log_error(area: str, accion: str, detalle: str = "") -> None:
    _logger.error(_format_message(area, accion, detalle))
