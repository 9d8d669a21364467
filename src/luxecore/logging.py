"""Centralized logging utilities for LuxeCore.

This module provides:
- Logging configuration from SharedConfig
- Safe previews for permission lists and payloads
- Structured logging with role/session context
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, SharedConfig

_RESERVED_RECORD_KEYS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "role_id", "session_id",
})


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a safe, length-bounded preview of a value for logging.

    Converts any value to a single-line string, normalizes whitespace and
    truncates to ``limit`` characters. Sets and frozensets are sorted first
    so grant lists log deterministically.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A safe, truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class LuxeCoreFormatter(logging.Formatter):
    """Formatter that includes role_id/session_id and optional JSON output."""

    def __init__(
        self,
        include_context: bool = True,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        """Initialize the formatter.

        Args:
            include_context: Whether to include role_id and session_id
            json_format: Whether to output JSON (True) or plain text (False)
        """
        super().__init__(*args, **kwargs)
        self.include_context = include_context
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        role_id = getattr(record, "role_id", None)
        session_id = getattr(record, "session_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            if role_id:
                log_data["role_id"] = str(role_id)
            if session_id:
                log_data["session_id"] = str(session_id)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if self.include_context and role_id:
            parts.append(f"role_id={log_data['role_id']}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class RoleLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds role_id and session_id to log records.

    Usage:
        logger = get_role_logger(__name__, role_id="r-1")
        logger.info("Saved %d permissions", 12)
    """

    def __init__(
        self,
        logger: logging.Logger,
        role_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.role_id = role_id
        self.session_id = session_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Process log message and add role context."""
        role_id = kwargs.pop("role_id", self.role_id)
        session_id = kwargs.pop("session_id", self.session_id)

        extra = kwargs.get("extra", {})
        if role_id:
            extra["role_id"] = role_id
        if session_id:
            extra["session_id"] = session_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[SharedConfig] = None,
    json_format: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """Configure root logging for an application embedding LuxeCore.

    Args:
        config: SharedConfig instance (if None, loads from environment)
        json_format: Force JSON (True) or plain text (False); defaults to config.log_json
        service_name: Optional logger name to set to the same level
    """
    if config is None:
        from .config import load_shared_config_from_env
        config = load_shared_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    if json_format is None:
        json_format = config.log_json

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(LuxeCoreFormatter(include_context=True, json_format=json_format))
    root_logger.addHandler(console_handler)

    name = service_name or config.service_name
    if name:
        logging.getLogger(name).setLevel(log_level)


def get_role_logger(
    name: str,
    role_id: Optional[str] = None,
    session_id: Optional[str] = None,
) -> RoleLoggerAdapter:
    """Get a logger adapter that tags records with role/session context.

    Args:
        name: Logger name (typically __name__)
        role_id: Optional role identifier to include in all logs
        session_id: Optional editing-session identifier to include in all logs

    Returns:
        RoleLoggerAdapter instance
    """
    logger = logging.getLogger(name)
    return RoleLoggerAdapter(logger, role_id=role_id, session_id=session_id)


__all__ = [
    "safe_preview",
    "LuxeCoreFormatter",
    "RoleLoggerAdapter",
    "setup_logging",
    "get_role_logger",
]
