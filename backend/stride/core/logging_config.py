"""
Stride - Logging

One "stride" logger for the API, the CLI and the scripts. Development gets
readable lines; production writes one JSON object per line. The request id
and the signed-in email travel in context variables so every line of a
request can be correlated without passing them around.
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from stride.core.config import settings


_request_id: ContextVar[str] = ContextVar("request_id", default="")
_user_email: ContextVar[str] = ContextVar("user_email", default="")

# Libraries that log every statement or every PDF token at INFO/DEBUG
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "pdfminer", "pdfplumber", "aiosqlite")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def set_user_email(email: str) -> None:
    _user_email.set(email)


def get_user_email() -> str:
    return _user_email.get()


def clear_log_context() -> None:
    _request_id.set("")
    _user_email.set("")


def log_context() -> Dict[str, str]:
    """Request id and user email of the current task, empty values dropped"""
    context = {"request_id": _request_id.get(), "user_email": _user_email.get()}
    return {key: value for key, value in context.items() if value}


def generate_request_id() -> str:
    """Short id for X-Request-ID; correlation only, not globally unique"""
    return uuid.uuid4().hex[:8]


# Attributes every LogRecord has; anything else arrived through `extra=`
_STANDARD_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "user_email"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line with the log context and any `extra=` fields"""

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **log_context(),
        }

        if record.exc_info and record.exc_info[0]:
            error_type, error, tb = record.exc_info
            data["exception"] = {
                "type": error_type.__name__,
                "message": str(error),
                "traceback": traceback.format_exception(error_type, error, tb),
            }

        data.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
        )
        return json.dumps(data, default=str)


class ContextualFormatter(logging.Formatter):
    """Plain-text formatter that fills %(request_id)s and %(user_email)s"""

    def format(self, record: logging.LogRecord) -> str:
        context = log_context()
        record.request_id = context.get("request_id", "-")
        record.user_email = context.get("user_email", "-")
        return super().format(record)


class StrideLogger(logging.Logger):
    """Logger with helpers for the events Stride reports on"""

    def log_report_import(self, source: str, filename: str, records: int,
                          duration_ms: float, **kwargs) -> None:
        """One line per parsed report; a report without rows is a warning"""
        self.log(
            logging.INFO if records else logging.WARNING,
            f"Report import ({source}) {filename}: {records} records ({duration_ms:.2f}ms)",
            extra={
                "event_type": "report_import",
                "report_source": source,
                "report_filename": filename,
                "records_extracted": records,
                "duration_ms": duration_ms,
                **kwargs,
            },
        )

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        parts = [f"Auth {event}: {'success' if success else 'failed'}"]
        parts.extend(part for part in (user_email, reason) if part)
        self.log(
            logging.INFO if success else logging.WARNING,
            " - ".join(parts),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "failure_reason": reason,
                **kwargs,
            },
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **kwargs) -> None:
        """Unhandled error with traceback, tagged with where it surfaced"""
        self.error(
            f"Error in {context}: {type(error).__name__}: {error}",
            exc_info=error,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_context": context,
                **kwargs,
            },
        )


def _file_handler(path: str, formatter: logging.Formatter) -> RotatingFileHandler:
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=5)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> StrideLogger:
    """Build the "stride" logger from LOG_LEVEL, LOG_FILE and ENVIRONMENT"""
    logging.setLoggerClass(StrideLogger)
    stride_logger = logging.getLogger("stride")
    stride_logger.__class__ = StrideLogger
    stride_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    stride_logger.handlers.clear()

    json_logs = settings.ENVIRONMENT == "production"
    if json_logs:
        file_formatter: logging.Formatter = JSONFormatter()
        console_formatter: logging.Formatter = file_formatter
    else:
        file_formatter = ContextualFormatter(
            "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(user_email)s] | "
            "%(module)s:%(lineno)d | %(message)s"
        )
        console_formatter = ContextualFormatter("%(levelname)-8s | [%(request_id)s] %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)
    stride_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        stride_logger.addHandler(_file_handler(settings.LOG_FILE, file_formatter))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return stride_logger


logger: StrideLogger = setup_logging()


__all__ = [
    "logger",
    "setup_logging",
    "set_request_id",
    "set_user_email",
    "get_user_email",
    "clear_log_context",
    "log_context",
    "generate_request_id",
    "JSONFormatter",
    "ContextualFormatter",
    "StrideLogger",
]
