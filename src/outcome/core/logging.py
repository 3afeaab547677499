"""
Structured logging for the notifier, built on structlog over stdlib logging.

Every event goes through a stdlib logger under the ``outcome`` namespace, so
the host application's level filtering applies. Notifiers only emit debug
events, which stdlib drops under its default WARNING level: a plain
``notify()`` prints nothing until someone asks for it.

Usage:
    >>> from outcome.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> get_logger(__name__).debug("observer_invoked", variant="success")

``configure_logging()`` without arguments takes ``OUTCOME_LOG_LEVEL`` and
``OUTCOME_LOG_JSON`` from the settings. ``LogContext`` binds
``notifier``/``dispatch_id`` for everything logged inside one dispatch.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog
from structlog.types import Processor

ROOT_LOGGER = "outcome"


def _stdlib_processors() -> list[Processor]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


class _NotifierLogger:
    """
    Lazy logger for library modules.

    Uses the host's structlog configuration once there is one; until then it
    wraps the stdlib logger directly so level filtering still applies.
    """

    def __init__(self, name: str):
        self._name = name

    def _target(self) -> Any:
        if structlog.is_configured():
            return structlog.get_logger(self._name)
        return structlog.wrap_logger(
            logging.getLogger(self._name),
            processors=_stdlib_processors() + [structlog.processors.KeyValueRenderer(key_order=["event"])],
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def __getattr__(self, method: str) -> Any:
        return getattr(self._target(), method)


def get_logger(name: str | None = None) -> Any:
    """Get a logger for ``name`` (usually ``get_logger(__name__)``)."""
    return _NotifierLogger(name or ROOT_LOGGER)


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send ``outcome.*`` events to a stream, rendered by structlog.

    Args:
        level: DEBUG/INFO/WARNING/ERROR; None reads ``OUTCOME_LOG_LEVEL``
        json_format: True for JSON, False for console; None reads
            ``OUTCOME_LOG_JSON`` and falls back to JSON when not a tty
        stream: Output stream (default stdout)
    """
    from outcome.core.settings import get_settings

    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json
    stream = stream or sys.stdout
    if json_format is None:
        json_format = not stream.isatty()

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            *_stdlib_processors(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger(ROOT_LOGGER)
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level))
    root.propagate = False


def reset_logging() -> None:
    """Undo configure_logging(): structlog defaults, bare ``outcome`` logger."""
    structlog.reset_defaults()
    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True


class LogContext:
    """Bind context vars for the duration of one dispatch.

    Example:
        with LogContext(notifier="images", dispatch_id="d-1"):
            deliver(result, observers, notifier="images")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: Any = None

    def __enter__(self) -> LogContext:
        self._tokens = structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)

    async def __aenter__(self) -> LogContext:
        return self.__enter__()

    async def __aexit__(self, *args) -> None:
        self.__exit__(*args)


__all__ = ["ROOT_LOGGER", "configure_logging", "reset_logging", "get_logger", "LogContext"]
