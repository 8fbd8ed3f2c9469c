"""
Structured logging utilities for the owo client.

Both bridges log through these helpers so records are consistent no matter
which transport produced them.

Log fields always present on owo records:
- component (requests|httpx|oneshot|common)
- operation (upload_file|upload_files|shorten_url)
- error_code (optional OWO-XXX-NNNN)
- duration_ms (optional)

The service key is never put on a record.
"""

from __future__ import annotations

import json
import logging
import logging.config
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

from owo.config import settings

ROOT_LOGGER_NAME = "owo"

_LOGGER_INITIALIZED = False
_COMPONENT_HANDLERS: Dict[str, logging.Handler] = {}

_KNOWN_COMPONENTS = ("requests", "httpx", "oneshot")


# -----------------------------------------------------------------------------
# 1. GET COMPONENT FROM LOGGER NAME
# -----------------------------------------------------------------------------
def _extract_component(logger_name: str) -> str:
    """
    Extract component name from logger name.

    Examples:
    - "owo.requests.upload_file" -> "requests"
    - "owo.httpx.shorten_url" -> "httpx"
    - "owo.models" -> "common"
    """
    parts = logger_name.split(".")
    if len(parts) > 1 and parts[1].lower() in _KNOWN_COMPONENTS:
        return parts[1].lower()
    return "common"


# -----------------------------------------------------------------------------
# 2. JSON LINE FORMATTER
# -----------------------------------------------------------------------------
class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; values are escaped by json.dumps."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("component", "operation", "error_code", "duration_ms"):
            payload[attr] = getattr(record, attr, None)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


# -----------------------------------------------------------------------------
# 3. GET OR CREATE COMPONENT FILE HANDLER
# -----------------------------------------------------------------------------
def _get_component_file_handler(component: str) -> Optional[logging.Handler]:
    """
    Get or create a file handler for a specific component.
    Creates {LOG_DIR}/{component}/owo.log with rotation, only when LOG_DIR is set.
    """
    if not settings.LOG_DIR:
        return None

    if component in _COMPONENT_HANDLERS:
        return _COMPONENT_HANDLERS[component]

    component_log_dir = Path(settings.LOG_DIR) / component
    component_log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(component_log_dir / "owo.log"),
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(JsonLineFormatter())
    handler.setLevel(logging.DEBUG)

    _COMPONENT_HANDLERS[component] = handler
    return handler


# -----------------------------------------------------------------------------
# 4. LOAD LOGGING YAML (optional)
# -----------------------------------------------------------------------------
def _load_logging_config() -> None:
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    if settings.LOGGING_YAML and Path(settings.LOGGING_YAML).exists():
        logging.config.dictConfig(settings.load_yaml(settings.LOGGING_YAML))

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    if root.level == logging.NOTSET:
        root.setLevel(settings.LOG_LEVEL.upper())

    _LOGGER_INITIALIZED = True


# -----------------------------------------------------------------------------
# 5. CONTEXT FILTER
# -----------------------------------------------------------------------------
class OwoContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for attr in ("component", "operation", "error_code", "duration_ms"):
            if not hasattr(record, attr):
                setattr(record, attr, None)
        return True


# -----------------------------------------------------------------------------
# 6. GET LOGGER
# -----------------------------------------------------------------------------
def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``owo`` namespace.

    Parameters
    ----------
    name : str
        Logger name (e.g., "owo.requests.upload_file", "owo.httpx.shorten_url")

    Returns
    -------
    logging.Logger
        Logger with the context filter and, if LOG_DIR is configured, the
        component file handler attached.
    """
    _load_logging_config()
    logger = logging.getLogger(name)

    if not any(isinstance(f, OwoContextFilter) for f in logger.filters):
        logger.addFilter(OwoContextFilter())

    file_handler = _get_component_file_handler(_extract_component(name))
    if file_handler is not None and file_handler not in logger.handlers:
        logger.addHandler(file_handler)

    return logger


def bind_context(
    component: str,
    operation: str,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a log call."""
    base: Dict[str, Any] = {"component": component, "operation": operation}
    if extra:
        base.update(extra)
    return base
