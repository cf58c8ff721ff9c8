"""Structured logging configuration for navgraph.

Console output goes through rich on stderr, its level set by the ``-v`` count.
With a log directory configured, every event is also appended to
``{log_dir}/debug.jsonl`` as one JSON object per line.

Keys bound with :func:`structlog.contextvars.bound_contextvars` (the shell binds
``command`` while it runs one) are merged into every event, so store
mutations in the JSONL log can be traced back to the command that caused them.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 - Used at runtime for path operations
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from structlog.typing import Processor

DEBUG_LOG_NAME = "debug.jsonl"
CONSOLE_LEVELS = {0: logging.WARNING, 1: logging.INFO}

_configured = False
_file_handler: JSONLFileHandler | None = None


def record_to_entry(record: logging.LogRecord) -> dict[str, Any]:
    """Flatten a log record into one JSONL entry.

    structlog hands its event dict over as ``record.msg``; its ``event`` key
    becomes ``message`` and the remaining keys sit next to it. Plain stdlib
    records only contribute their formatted message.
    """
    entry: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "level": record.levelname,
        "logger": record.name,
    }
    if not isinstance(record.msg, dict):
        entry["message"] = record.getMessage()
        return entry

    context = {k: v for k, v in record.msg.items() if k not in ("level", "timestamp")}
    entry["message"] = context.pop("event", "")
    entry.update(context)
    return entry


class JSONLFileHandler(logging.FileHandler):
    """File handler that writes one JSON object per record.

    Vertex identifiers can be any hashable, so values JSON cannot encode are
    written as their ``repr``.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(record_to_entry(record), default=repr)
            if self.stream:
                self.stream.write(line + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


def _console_handler(verbosity: int) -> RichHandler:
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=verbosity >= 1,
        show_path=verbosity >= 2,
        markup=False,
        level=CONSOLE_LEVELS.get(verbosity, logging.DEBUG),
    )


def _open_debug_log(log_dir: Path) -> JSONLFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = JSONLFileHandler(str(log_dir / DEBUG_LOG_NAME), mode="a")
    handler.setLevel(logging.DEBUG)
    return handler


def configure_logging(verbosity: int = 0, log_dir: Path | None = None) -> None:
    """Configure logging for navgraph.

    Safe to call repeatedly; a previously opened debug log is closed first.

    Args:
        verbosity: 0=WARNING (default), 1=INFO, 2+=DEBUG on the console.
        log_dir: If given, also write every event (DEBUG and up) to
            ``log_dir/debug.jsonl``. The directory is created if needed.
    """
    global _configured, _file_handler

    close_file_logging()

    handlers: list[logging.Handler] = [_console_handler(verbosity)]
    if log_dir is not None:
        _file_handler = _open_debug_log(log_dir)
        handlers.append(_file_handler)

    # the debug log needs DEBUG records even when the console shows warnings only
    root_level = logging.DEBUG if (verbosity > 0 or log_dir is not None) else logging.WARNING
    logging.basicConfig(level=root_level, format="%(message)s", handlers=handlers, force=True)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        # module-level loggers must follow later reconfiguration
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a structured logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()

    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger


def close_file_logging() -> None:
    """Close the JSONL debug log, if one is open."""
    global _file_handler
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None
