"""
Centralized logging configuration.

Every module logs under the `matchform` namespace; only the CLI (or a
notebook) calls setup_logging(). Console output goes to stderr so that
command output on stdout stays machine-readable.

Usage:
    from matchform.utils.logging import setup_logging, get_logger

    # At application startup
    setup_logging()

    # In any module
    logger = get_logger("features.dataset")
    logger.info("Dataset pass complete")

    # Attach request context to every record logged inside the block
    with LogContext(season="2015/2016", home_id=8634):
        logger.debug("Building prediction features")
"""

import copy
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from matchform.config import get_settings


ROOT_LOGGER = "matchform"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# Log Formatters
# =============================================================================

class ContextFormatter(logging.Formatter):
    """Plain text formatter that appends LogContext fields to the message."""

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT):
        super().__init__(fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            text = f"{text} [{pairs}]"
        return text


class ColoredFormatter(ContextFormatter):
    """Colored console formatter for interactive use."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Handlers share the record; colour a copy so other handlers see the plain level
        colored = copy.copy(record)
        color = self.COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context nested under `context`."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_record["context"] = context

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


# =============================================================================
# Setup Functions
# =============================================================================

_logging_configured = False


def _console_handler(json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JSONFormatter() if json_format else ColoredFormatter())
    return handler


def _file_handler(log_file: Path, json_format: bool) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JSONFormatter() if json_format else ContextFormatter())
    return handler


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_format: Optional[bool] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the `matchform` logger.

    Args:
        level: Log level name. Defaults to settings.log_level.
        log_file: Optional file path. Defaults to settings.log_file.
        json_format: JSON lines instead of text. Defaults to settings.log_json.
        force: Reconfigure even if already configured.

    Returns:
        The application root logger

    Raises:
        ValueError: if the level name is not a standard logging level
    """
    global _logging_configured

    root_logger = logging.getLogger(ROOT_LOGGER)
    if _logging_configured and not force:
        return root_logger

    settings = get_settings()
    level = (level or settings.log_level).upper()
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    log_file = log_file or settings.log_file
    if json_format is None:
        json_format = settings.log_json

    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = []
    root_logger.setLevel(numeric_level)

    root_logger.addHandler(_console_handler(json_format))
    if log_file:
        root_logger.addHandler(_file_handler(Path(log_file), json_format))

    _logging_configured = True
    root_logger.debug("Logging configured")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger under the application namespace.

    Accepts either a short name ("cli") or a module path ("matchform.cli").
    """
    if name.startswith(f"{ROOT_LOGGER}."):
        name = name[len(ROOT_LOGGER) + 1:]

    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


# =============================================================================
# Context Managers
# =============================================================================

class LogContext:
    """
    Attach key/value context to every record created inside the block.

    Nested contexts merge, inner keys winning.
    """

    def __init__(self, **context):
        self.context = context
        self._old_factory = None

    def __enter__(self):
        self._old_factory = old_factory = logging.getLogRecordFactory()
        context = self.context

        def factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.context = {**getattr(record, "context", {}), **context}
            return record

        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, *args):
        logging.setLogRecordFactory(self._old_factory)
