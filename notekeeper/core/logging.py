"""
Logging Setup.

structlog routed through the standard library, configured from
config/settings/logging.yaml. Every module gets its logger from
get_logger(__name__); nothing creates standalone loggers.

JSON records carry timestamp, level, logger, event, func_name and lineno,
plus whatever the caller passes as extra fields or binds to the context.
Storage writes bind ``storage_key`` so records emitted on the writer
thread can be traced back to the flush that queued them.

Usage:
    from notekeeper.core.logging import get_logger, setup_logging

    setup_logging()                          # levels/handlers from logging.yaml
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id})

    with bound_context(storage_key=key):
        executor.submit(write)               # context follows the job

    log_with_source(logger, "storage", "error", "Write failed", key=key)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from notekeeper.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({
    "cli",
    "storage",
    "internal",
    "unknown",
})
"""Values for the ``source`` field. Callers set it explicitly."""

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Read logging.yaml once per process."""
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    """Log file paths in logging.yaml are relative to the project root."""
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, processors: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=processors,
    )


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(file_config["path"])
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments override the matching logging.yaml values. Console output
    goes to stderr so command output on stdout stays clean; the file
    handler always writes JSON lines.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'console' or 'json' for the console handler
        enable_console: Turn the stderr handler on or off
        enable_file_logging: Turn the rotating JSONL file on or off
    """
    config = _load_logging_config()
    handlers = config["handlers"]

    effective_level = level or config["level"]
    effective_format = format_type or config["format"]
    console_enabled = handlers["console"]["enabled"] if enable_console is None else enable_console
    file_enabled = handlers["file"]["enabled"] if enable_file_logging is None else enable_file_logging

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)
    if effective_format == "console":
        console_formatter = _formatter(structlog.dev.ConsoleRenderer(colors=True), processors)
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, effective_level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if file_enabled:
        root_logger.addHandler(_file_handler(handlers["file"], json_formatter))

    # SQL echo is opt-in per engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Logger for a module, typically get_logger(__name__)."""
    return structlog.get_logger(name)


@contextmanager
def bound_context(**fields: Any) -> Iterator[None]:
    """
    Bind fields to every record logged inside the block.

    Jobs submitted to a TracedThreadPoolExecutor inside the block keep
    the fields after the block exits.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message tagged with where it came from.

    Args:
        logger: The logger instance
        source: One of VALID_SOURCES
        level: debug, info, warning, error or critical
        message: Log message
        **kwargs: Additional context fields

    Raises:
        AttributeError: If level is not a logger method
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
