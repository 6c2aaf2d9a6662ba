"""Structured logging module for cypherlink.

This module provides:
- JSONFormatter with timestamp, level, service, transaction_id, module, message
- TransactionIdFilter stamping the active transaction onto each record
- Optional RotatingFileHandler for JSON logs
- Log level configurable via CYPHERLINK_LOG_LEVEL env var
"""

import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


# Set by Transaction.execute() for the duration of one exchange
_transaction_id: ContextVar[str | None] = ContextVar("transaction_id", default=None)


def set_transaction_id(transaction_id: str) -> Token:
    """Set the transaction ID for the current context."""
    return _transaction_id.set(transaction_id)


def get_transaction_id() -> str | None:
    """Get the current transaction ID from context."""
    return _transaction_id.get()


def reset_transaction_id(token: Token) -> None:
    """Restore the transaction ID that was active before set_transaction_id()."""
    _transaction_id.reset(token)


class JSONFormatter(logging.Formatter):
    """JSON log formatter with standard fields."""

    def __init__(self, service_name: str = "cypherlink", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        transaction_id = getattr(record, "transaction_id", "-")

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "transaction_id": transaction_id,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class TransactionIdFilter(logging.Filter):
    """Filter that adds the active transaction ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        transaction_id = get_transaction_id()
        record.transaction_id = transaction_id if transaction_id else "-"
        return True


def get_log_level_from_env(service_prefix: str = "CYPHERLINK") -> int:
    """Get log level from CYPHERLINK_LOG_LEVEL env var."""
    env_var = f"{service_prefix}_LOG_LEVEL"
    level_str = os.environ.get(env_var, "INFO").upper()
    level = getattr(logging, level_str, None)
    return level if isinstance(level, int) else logging.INFO


def create_file_handler(
    log_file_path: str,
    service_name: str = "cypherlink",
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> RotatingFileHandler:
    """Create a rotating file handler for JSON logs."""
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=log_file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(JSONFormatter(service_name=service_name))
    handler.addFilter(TransactionIdFilter())
    return handler


def setup_structured_logging(
    service_name: str = "cypherlink",
    log_file_path: str | None = None,
    log_level: int | None = None,
) -> logging.Logger:
    """Set up structured logging on the package logger.

    Library modules log under ``cypherlink.*``, so configuring the
    ``cypherlink`` logger captures transaction and transport records.
    """
    if log_level is None:
        log_level = get_log_level_from_env()

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter(service_name=service_name))
    console_handler.addFilter(TransactionIdFilter())
    logger.addHandler(console_handler)

    if log_file_path:
        try:
            file_handler = create_file_handler(log_file_path, service_name)
            file_handler.setLevel(log_level)
            logger.addHandler(file_handler)
        except PermissionError:
            logger.warning("Cannot write to %s, file logging disabled", log_file_path)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name or "cypherlink")
