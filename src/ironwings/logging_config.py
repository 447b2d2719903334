"""
Structured JSON Logging Configuration for the Ironwings cart

Provides consistent, parseable logging for development and production.
Logs can be viewed with jq for easy filtering and analysis.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Cart context fields promoted to top-level keys when passed via extra={}
CONTEXT_FIELDS = (
    'item_id', 'item_name', 'quantity', 'item_count',
    'storage_key', 'backend', 'operation', 'error_type',
)

_STANDARD_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'getMessage',
}


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs logs as single-line JSON objects that are:
    - Machine-parseable (CloudWatch, Elasticsearch, etc.)
    - Human-readable with jq
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Anything passed through extra={} that is JSON friendly
        for attr_name, attr_value in record.__dict__.items():
            if attr_name in _STANDARD_ATTRS or attr_name in log_data:
                continue
            if isinstance(attr_value, (str, int, float, bool, type(None), dict, list)):
                log_data[attr_name] = attr_value

        return json.dumps(log_data, ensure_ascii=False)


class PrettyFormatter(logging.Formatter):
    """
    Colored single-line formatter for development consoles.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime('%H:%M:%S.%f')[:-3]
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        parts = [
            f"{color}[{record.levelname}]{reset}",
            timestamp,
            f"{record.name}:",
            record.getMessage(),
        ]

        context = [
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        ]
        if context:
            parts.append(f"({', '.join(context)})")

        result = ' '.join(parts)
        if record.exc_info:
            result += '\n' + self.formatException(record.exc_info)
        return result


def setup_logging(
    app_name: str = 'ironwings',
    log_level: str = 'INFO',
    log_format: str = 'json',
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure structured logging for the cart.

    Args:
        app_name: Name of the application logger (parent of all module loggers)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('json' or 'pretty')
        log_file: Optional file path for file-based logging

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging('ironwings', 'INFO', 'pretty')
        >>> logger.info('Cart loaded', extra={'item_count': 3})
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(app_name)
    logger.setLevel(numeric_level)
    logger.handlers = []  # Clear any existing handlers

    if log_format == 'pretty':
        formatter: logging.Formatter = PrettyFormatter()
    else:
        formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            # Always use JSON for file logs
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to setup file logging: {e}")

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def setup_logging_from_config(cfg=None) -> logging.Logger:
    """Configure logging from a CartConfig (defaults to the global one)."""
    if cfg is None:
        from ironwings.config import config as cfg
    return setup_logging('ironwings', cfg.LOG_LEVEL, cfg.LOG_FORMAT, cfg.LOG_FILE)
