"""
Structured logging for glassprofile.

This module configures the ``glassprofile`` package logger with a structured
JSON (or plain text) formatter, a console handler and an optional rotating
log file. Loggers handed out by :func:`get_logger` are children of the
package logger, so applications embedding the profiler keep control of the
root logger.
"""
import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

PACKAGE_LOGGER_NAME = "glassprofile"

_RESERVED_RECORD_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno',
    'pathname', 'filename', 'module', 'lineno',
    'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process',
    'getMessage', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'extra_fields', 'message', 'asctime'
])


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for log records.

    Every record becomes a single JSON object with timestamp, level, logger
    name, message and call site, followed by any structured fields passed
    through ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as structured JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        for key, value in record.__dict__.items():
            if key.startswith('_') or key in _RESERVED_RECORD_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ProfileLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that attaches a fixed set of structured fields to every record.
    """

    def __init__(self, logger, extra_fields=None):
        super().__init__(logger, {})
        self.extra_fields = extra_fields or {}

    def process(self, msg, kwargs):
        if self.extra_fields:
            extra = kwargs.setdefault('extra', {})
            extra['extra_fields'] = {**self.extra_fields, **extra.get('extra_fields', {})}
        return msg, kwargs

    def bind(self, **kwargs):
        """Create a new adapter with additional context."""
        return ProfileLoggerAdapter(self.logger, {**self.extra_fields, **kwargs})


class LogManager:
    """
    Thread-safe manager for the glassprofile loggers and their handlers.
    """

    def __init__(self,
                 log_level: str = "INFO",
                 log_format: str = "json",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5,
                 stream=None):
        """
        Initialize the log manager.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Log format ('json' or 'text')
            log_file: Path to log file (optional)
            max_bytes: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
            stream: Console stream (defaults to stdout)
        """
        self.log_level = getattr(logging, log_level.upper())
        self.log_format = log_format
        self.log_file = log_file
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.stream = stream

        self._lock = threading.RLock()
        self._initialized = False
        self._loggers: Dict[str, logging.Logger] = {}

        self._safe_initialize()

    def _safe_initialize(self):
        with self._lock:
            if not self._initialized:
                try:
                    self._configure_package_logger()
                except (OSError, ValueError) as e:
                    logging.getLogger(PACKAGE_LOGGER_NAME).error(
                        "Failed to initialize glassprofile logging: %s", e
                    )
                self._initialized = True

    def _build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return StructuredFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _configure_package_logger(self):
        """Attach console and file handlers to the package logger."""
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        package_logger.setLevel(self.log_level)

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()

        formatter = self._build_formatter()

        console_handler = logging.StreamHandler(self.stream or sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger with the specified name.

        Names outside the package namespace are nested under it so that the
        configured handlers apply.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
            name = f"{PACKAGE_LOGGER_NAME}.{name}"
        with self._lock:
            if name not in self._loggers:
                self._loggers[name] = logging.getLogger(name)
            return self._loggers[name]

    def get_adapter(self, name: str, **extra_fields) -> ProfileLoggerAdapter:
        """
        Get a logger adapter carrying structured fields.

        Args:
            name: Logger name
            **extra_fields: Fields to include in all log messages

        Returns:
            Logger adapter instance
        """
        return ProfileLoggerAdapter(self.get_logger(name), extra_fields)


_log_manager: Optional[LogManager] = None
_log_manager_lock = threading.RLock()


def initialize_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    force: bool = False
) -> LogManager:
    """
    Initialize the global logging system.

    The first call wins; later calls return the existing manager unless
    ``force`` is set.

    Args:
        log_level: Logging level
        log_format: Log format ('json' or 'text')
        log_file: Path to log file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
        force: Replace an already initialized manager

    Returns:
        Configured log manager instance
    """
    global _log_manager

    with _log_manager_lock:
        if _log_manager is None or force:
            _log_manager = LogManager(
                log_level=log_level,
                log_format=log_format,
                log_file=log_file,
                max_bytes=max_bytes,
                backup_count=backup_count
            )

    return _log_manager


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    with _log_manager_lock:
        if _log_manager is None:
            initialize_logging()
        return _log_manager.get_logger(name)


def get_adapter(name: str, **extra_fields) -> ProfileLoggerAdapter:
    """
    Get a logger adapter with extra structured fields.

    Args:
        name: Logger name
        **extra_fields: Additional fields to include in all log messages

    Returns:
        Logger adapter instance
    """
    with _log_manager_lock:
        if _log_manager is None:
            initialize_logging()
        return _log_manager.get_adapter(name, **extra_fields)
