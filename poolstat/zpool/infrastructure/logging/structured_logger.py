"""
Structured logger implementation for pool status operations.
"""
import json
import logging
import sys
import threading
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from ...core.interfaces.logger_interface import ILogger

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'stack_info', 'taskName',
    'exc_info', 'exc_text', 'message', 'timestamp'
}


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": getattr(record, 'timestamp', _utcnow()),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_entry:
                continue
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        try:
            return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'))
        except (TypeError, ValueError):
            return str(log_entry)


class StructuredLogger(ILogger):
    """Structured logger implementation with JSON formatting and context support."""

    def __init__(self, name: str = "poolstat", level: str = "INFO"):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(level, message, extra)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, message, extra, exc_info=True)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False) -> None:
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            name=self.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=sys.exc_info() if exc_info else None
        )

        for key, value in (extra or {}).items():
            if key not in _RESERVED_ATTRS:
                setattr(record, key, value)

        record.timestamp = _utcnow()
        self.logger.handle(record)


class ContextLogger(StructuredLogger):
    """Logger with persistent context that gets added to all log messages."""

    def __init__(self, name: str = "poolstat", level: str = "INFO", context: Optional[Dict[str, Any]] = None):
        super().__init__(name, level)
        self.context = dict(context or {})
        self._context_lock = threading.Lock()

    def add_context(self, key: str, value: Any) -> None:
        with self._context_lock:
            self.context[key] = value

    def remove_context(self, key: str) -> None:
        with self._context_lock:
            self.context.pop(key, None)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False) -> None:
        with self._context_lock:
            merged_extra = self.context.copy()
        if extra:
            merged_extra.update(extra)

        super()._log(level, message, merged_extra, exc_info)


def configure_logging(level: str = "INFO", name: str = "poolstat") -> logging.Logger:
    """Attach the JSON formatter to the package logger used by the parsers."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    return logger
