"""
Alchemy Table Logging Subsystem

Purpose
-------
One logging setup for the whole core. Services and the content loader log
through it; the pure engines (xp, crafting, quests, cosmetics) never do.

Responsibilities
----------------
- Install a queue-backed root handler so emitting a record never blocks on
  console or file I/O
- Stamp every record with the active player context (player_id,
  operation, component, correlation_id) held in a ContextVar
- Render records as JSON (production, files) or readable text (development)
- Report queue health and dropped records

Design Notes
------------
- Context is captured by a filter on the queue handler, i.e. in the
  emitting thread, before the record is handed to the listener thread.
- The queue is bounded. When it is full the record is dropped and counted.
- File output is opt-in (``LOG_TO_FILE``); one rotated day is kept.
- Everything reads ``Config`` at setup time, so tests set the environment
  before the first import.

Usage
-----
    from src.core.logging import LogContext, get_logger

    logger = get_logger(__name__)
    with LogContext(player_id="p-42", operation="claim_quest"):
        logger.info("Quest claimed", extra={"quest_id": "first-brew"})
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.core.config.config import Config

_log_context: ContextVar[Dict[str, Any]] = ContextVar("alchemy_log_context", default={})

_INIT_FLAG = "_alchemy_logging_initialized"
_UNSET = "N/A"


# ============================================================================
# Settings
# ============================================================================


@dataclass(frozen=True)
class LoggerConfig:
    """Logging settings derived from Config on every access."""

    TEXT_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)-34s | %(message)s"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    FILE_NAME: str = "alchemy_daily.json.log"
    FILE_BACKUPS: int = 1
    QUEUE_MAX_SIZE: int = 10_000

    @property
    def level(self) -> int:
        level = getattr(logging, str(Config.LOG_LEVEL).upper(), None)
        return level if isinstance(level, int) else logging.INFO

    @property
    def as_json(self) -> bool:
        return bool(Config.LOG_JSON)

    @property
    def to_file(self) -> bool:
        return bool(Config.LOG_TO_FILE)

    @property
    def logs_dir(self) -> Path:
        return Path(Config.LOGS_DIR)

    @property
    def colored(self) -> bool:
        return not self.as_json and sys.stdout.isatty()


LOGGER_CONFIG = LoggerConfig()


# ============================================================================
# Health
# ============================================================================


@dataclass
class _Counters:
    enqueued: int = 0
    dropped: int = 0
    handler_errors: int = 0


@dataclass(frozen=True)
class LoggingHealth:
    initialized: bool
    queue_size: int
    queue_max_size: int
    records_enqueued: int
    records_dropped: int
    listener_errors: int


_counters = _Counters()
_queue: Optional["queue.Queue[logging.LogRecord]"] = None
_listener: Optional[QueueListener] = None


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """
    Copy the active log context onto each record.

    Values passed explicitly through ``extra`` win over the context.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get({})

        record.player_id = context.get("player_id", _UNSET)
        record.correlation_id = context.get("correlation_id", _UNSET)
        record.component = context.get("component") or record.name.partition(".")[0]
        if not hasattr(record, "operation"):
            record.operation = context.get("operation", _UNSET)

        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class ColoredFormatter(logging.Formatter):
    """Text formatter that tints the level name for terminals."""

    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[1;91m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


# Attributes every LogRecord has; anything else on a record came from extra
# or from ContextFilter.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line: core fields, context fields, then extras."""

    CONTEXT_ATTRS = ("player_id", "correlation_id", "component", "operation")

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in self.CONTEXT_ATTRS:
            value = getattr(record, attr, None)
            if value is not None and value != _UNSET:
                payload[attr] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in self.CONTEXT_ATTRS
            and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


# ============================================================================
# Queue plumbing
# ============================================================================


class AlchemyQueueHandler(QueueHandler):
    """Non-blocking enqueue; a full queue drops the record."""

    def enqueue(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        _counters.enqueued += 1
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            _counters.dropped += 1
            sys.stderr.write("alchemy logging: queue full, record dropped\n")


class AlchemyQueueListener(QueueListener):
    def handleError(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        _counters.handler_errors += 1
        sys.stderr.write("alchemy logging: handler failed while emitting a record\n")


def _text_formatter() -> logging.Formatter:
    formatter_cls = ColoredFormatter if LOGGER_CONFIG.colored else logging.Formatter
    return formatter_cls(fmt=LOGGER_CONFIG.TEXT_FORMAT, datefmt=LOGGER_CONFIG.DATE_FORMAT)


def _sinks() -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(JSONFormatter() if LOGGER_CONFIG.as_json else _text_formatter())
    sinks: List[logging.Handler] = [console]

    if LOGGER_CONFIG.to_file:
        LOGGER_CONFIG.logs_dir.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            filename=str(LOGGER_CONFIG.logs_dir / LOGGER_CONFIG.FILE_NAME),
            when="midnight",
            backupCount=LOGGER_CONFIG.FILE_BACKUPS,
            encoding="utf-8",
            utc=True,
        )
        rotating.setFormatter(JSONFormatter())
        sinks.append(rotating)

    for sink in sinks:
        sink.setLevel(LOGGER_CONFIG.level)
    return sinks


# ============================================================================
# Setup / Teardown
# ============================================================================


def setup_logging() -> None:
    """Route the root logger through the queue. Safe to call repeatedly."""
    global _queue, _listener, _counters

    root = logging.getLogger()
    if getattr(root, _INIT_FLAG, False):
        return

    _counters = _Counters()
    _queue = queue.Queue(LOGGER_CONFIG.QUEUE_MAX_SIZE)
    _listener = AlchemyQueueListener(_queue, *_sinks(), respect_handler_level=True)
    _listener.start()

    handler = AlchemyQueueHandler(_queue)
    handler.setLevel(LOGGER_CONFIG.level)
    handler.addFilter(ContextFilter())

    root.handlers.clear()
    root.setLevel(LOGGER_CONFIG.level)
    root.addHandler(handler)
    setattr(root, _INIT_FLAG, True)

    logging.getLogger(__name__).debug(
        "Logging ready",
        extra={
            "environment": Config.ENVIRONMENT,
            "json": LOGGER_CONFIG.as_json,
            "file": LOGGER_CONFIG.to_file,
        },
    )


def shutdown_logging() -> None:
    """Drain the queue, stop the listener and detach the queue handler."""
    global _queue, _listener

    root = logging.getLogger()
    if not getattr(root, _INIT_FLAG, False):
        return

    if _listener is not None:
        _listener.stop()
        _listener = None

    for handler in [h for h in root.handlers if isinstance(h, AlchemyQueueHandler)]:
        root.removeHandler(handler)
        handler.close()

    setattr(root, _INIT_FLAG, False)
    _queue = None


def get_logging_health() -> LoggingHealth:
    return LoggingHealth(
        initialized=bool(getattr(logging.getLogger(), _INIT_FLAG, False)),
        queue_size=_queue.qsize() if _queue is not None else 0,
        queue_max_size=_queue.maxsize if _queue is not None else 0,
        records_enqueued=_counters.enqueued,
        records_dropped=_counters.dropped,
        listener_errors=_counters.handler_errors,
    )


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Bind player and operation context to every record logged in a block.

    Works as a sync or async context manager. A correlation id is generated
    when none is given.

    Example:
        >>> with LogContext(player_id="p-42", operation="craft", recipe_id="calm-tea"):
        ...     service.craft(recipe, level, inventory)
    """

    def __init__(
        self,
        player_id: Optional[str] = None,
        operation: Optional[str] = None,
        component: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = {
            "player_id": _UNSET if player_id is None else str(player_id),
            "operation": operation or _UNSET,
            "component": component,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def set_log_context(
    player_id: Optional[str] = None,
    operation: Optional[str] = None,
    component: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra: Any,
) -> None:
    """Merge values into the current context without a ``with`` block."""
    updated = dict(_log_context.get({}))
    named = {
        "player_id": None if player_id is None else str(player_id),
        "operation": operation,
        "component": component,
        "correlation_id": correlation_id,
    }
    updated.update({key: value for key, value in named.items() if value})
    updated.update(extra)
    _log_context.set(updated)


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get({}))


def clear_log_context() -> None:
    _log_context.set({})


setup_logging()
