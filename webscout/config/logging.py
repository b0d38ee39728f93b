"""
Structured logging for webscout.

Records are emitted as single-line JSON objects through the standard
``logging`` module, so they can be shipped as-is by any log collector.
Loggers carry an immutable LogContext; per-request fields are attached with
``bind`` rather than by mutating a shared logger, which keeps concurrent
tool calls from overwriting each other's context.
"""

import json
import logging
import logging.config
import time
from contextlib import contextmanager
from dataclasses import dataclass, asdict, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional


@dataclass(frozen=True)
class LogContext:
    """Context fields attached to every record of a logger."""

    request_id: Optional[str] = None
    url: Optional[str] = None
    tool: Optional[str] = None
    processing_step: Optional[str] = None
    component: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class TimingInfo:
    """Wall-clock start plus a monotonic duration for one operation."""

    operation: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _start: float = field(default_factory=time.monotonic, repr=False)
    duration_ms: Optional[int] = None

    def finish(self) -> "TimingInfo":
        self.duration_ms = int((time.monotonic() - self._start) * 1000)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "started_at": self.started_at.isoformat(),
            "duration_ms": self.duration_ms,
        }


class StructuredLogger:
    """
    JSON logger with context and timing support.

    Every record holds the message, level, logger name, a UTC timestamp, the
    logger's LogContext and any keyword fields passed by the caller.
    """

    def __init__(self, name: str, context: Optional[LogContext] = None):
        self.logger = logging.getLogger(name)
        self.context = context or LogContext()

    def bind(self, **context) -> "StructuredLogger":
        """Return a logger for the same name with extra context fields."""
        known = {k: v for k, v in context.items() if k in LogContext.__dataclass_fields__}
        return StructuredLogger(self.logger.name, replace(self.context, **known))

    def _log(self, level: int, message: str, fields: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return

        record = {
            "message": message,
            "level": logging.getLevelName(level),
            "logger": self.logger.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "context": self.context.to_dict(),
        }
        record.update(fields)
        self.logger.log(level, json.dumps(record, default=str, ensure_ascii=False))

    def debug(self, message: str, **fields) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields) -> None:
        """Log an error, describing ``error`` (type, message, details) when given."""
        if error is not None:
            fields["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "details": getattr(error, "details", {}),
            }
        self._log(logging.ERROR, message, fields)

    @contextmanager
    def timed_operation(self, operation: str, **fields) -> Iterator[TimingInfo]:
        """
        Time the enclosed block and log its outcome.

        Success is logged at INFO, an exception at WARNING with the error
        text; the exception itself is re-raised.
        """
        timing = TimingInfo(operation)
        self.debug(f"Started {operation}", **fields)
        try:
            yield timing
        except Exception as e:
            timing.finish()
            self.warning(
                f"Operation {operation} failed",
                timing=timing.to_dict(),
                success=False,
                error=str(e),
                **fields
            )
            raise
        timing.finish()
        self.info(f"Operation {operation} completed", timing=timing.to_dict(), success=True, **fields)

    def log_http_request(
        self,
        method: str,
        url: str,
        status_code: int,
        duration_ms: int,
        success: bool,
        **fields
    ) -> None:
        """Log one HTTP exchange."""
        self.info(
            f"HTTP {method} {url} -> {status_code}",
            http_method=method,
            http_url=url,
            http_status=status_code,
            duration_ms=duration_ms,
            success=success,
            **fields
        )


def configure_logging(log_level: str = "INFO", enable_structured: bool = True) -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level name
        enable_structured: Emit the bare JSON records; otherwise prefix them
            with time, logger name and level
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"format": "%(message)s"},
            "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "structured" if enable_structured else "simple",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": log_level, "handlers": ["console"]},
        # Transport libraries log every request at INFO
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    })


def get_logger(name: str, context: Optional[LogContext] = None) -> StructuredLogger:
    """Get a structured logger, optionally with a fixed context."""
    return StructuredLogger(name, context)
