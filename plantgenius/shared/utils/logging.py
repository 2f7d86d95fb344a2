# 📄 File: plantgenius/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the app (sign-ins,
# failed fetches, payments) in a structured way, so problems are easy to trace.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), contextual information
# carried in contextvars, and a StructuredLogger wrapper that accepts keyword context.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Operation context tracking

# 🔄 Connected Modules / Calls From:
# Used by: every module for consistent logging of operations and identifiers

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

from plantgenius.shared.config.settings import get_settings

# Context variables for operation tracking
operation_id_var: ContextVar[str] = ContextVar('operation_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SERVICE_NAME = 'plantgenius-client'

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


def _context_fields() -> Dict[str, str]:
    fields = {}
    if operation_id_var.get():
        fields['operation_id'] = operation_id_var.get()
    if user_id_var.get():
        fields['user_id'] = user_id_var.get()
    return fields


class ContextualFormatter(logging.Formatter):
    """
    Text formatter that appends contextual information to log records.

    Adds operation ID, user ID and any structured extra fields
    to every log message for better traceability.
    """

    def format(self, record):
        record.timestamp = datetime.now(timezone.utc).isoformat()
        message = super().format(record)

        context = _context_fields()
        context.update(getattr(record, 'extra_fields', None) or {})
        if context:
            rendered = ' '.join(f'{key}={value}' for key, value in context.items())
            message = f'{message} [{rendered}]'
        return message


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with a consistent structure; structured
    extra fields are flattened into the top-level object.
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = SERVICE_NAME
        log_record.update(_context_fields())

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record.update(extra_fields)


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Keyword arguments passed to the log methods become structured
    fields on the record (``logger.info("Loaded", user_id=uid)``).
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        """Log debug message with extra fields."""
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        """Log info message with extra fields."""
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        """Log warning message with extra fields."""
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        """Log error message with extra fields."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in ['exc_info', 'stack_info', 'stacklevel']:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items()
                        if k in ['exc_info', 'stack_info', 'stacklevel']}

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)

    def log_user_action(
        self,
        action: str,
        user_id: str,
        result: str = 'success',
        extra: Dict = None
    ):
        """Log user action for audit trail."""
        extra_fields = {
            'event_type': 'user_action',
            'action': action,
            'user_id': user_id,
            'result': result,
            **(extra or {})
        }
        self.info(f"User {user_id} performed {action}", extra=extra_fields)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure the root logger once per process.

    Falls back to settings for anything not passed explicitly.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("plantgenius")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter('%(message)s')
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("plantgenius")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger
    return logger


@contextmanager
def log_context(user_id: Optional[str] = None, operation_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        user_id: User identifier
        operation_id: Operation identifier (generated when omitted)
    """
    if operation_id is None:
        operation_id = str(uuid4())

    operation_token = operation_id_var.set(operation_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'operation_id': operation_id, 'user_id': user_id}
    finally:
        operation_id_var.reset(operation_token)
        user_id_var.reset(user_token)
