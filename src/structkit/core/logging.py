# src/structkit/core/logging.py
"""Structured logging configuration for structkit.

The library only emits debug-level events (transforms applied, validation
failures, subtype cache hits, unmatched dispatches) through
``structlog.get_logger(__name__)``. Nothing is rendered until an application
calls configure_logging(), which decides the format and level.

Architecture:
    structlog records and stdlib records share one processor chain and are
    rendered by a single ProcessorFormatter, so both look the same whether
    the output is JSON or console text.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from structkit.contracts.schema import Schema

if TYPE_CHECKING:
    from structkit.core.config import ToolkitSettings

# Marks handlers installed here so reconfiguration leaves the host's own alone
_HANDLER_NAME = "structkit"


def _render_toolkit_values(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render schemas by label and enums by value so JSON output stays flat."""
    for key, value in event_dict.items():
        if isinstance(value, Schema):
            event_dict[key] = value.label
        elif isinstance(value, Enum):
            event_dict[key] = str(value.value)
    return event_dict


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always adds both keys
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    settings: ToolkitSettings | None = None,
    *,
    json_output: bool | None = None,
    level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Explicit keyword arguments win over ``settings``; with neither, output is
    console text at INFO. Calling again replaces the handler installed by the
    previous call.

    Args:
        settings: Source of ``json_logs`` and ``log_level``
        json_output: Render JSON lines instead of console text
        level: Level name, case-insensitive (DEBUG, INFO, WARNING, ERROR)
        stream: Destination; defaults to stdout
    """
    if json_output is None:
        json_output = settings.json_logs if settings is not None else False
    if level is None:
        level = settings.log_level if settings is not None else "INFO"
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        _render_toolkit_values,
    ]

    final_processors: list[Any] = [_drop_formatter_bookkeeping]
    if json_output:
        final_processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer(colors=False))
    formatter = ProcessorFormatter(
        processors=final_processors,
        foreign_pre_chain=shared_processors,
    )

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (tests, CLIs) must reach loggers created earlier
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for ``name`` (typically ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
