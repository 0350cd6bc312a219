"""Ambient infrastructure: configuration, logging, and field notation."""

from structkit.core.config import DEFAULT_SETTINGS, ToolkitSettings, load_settings
from structkit.core.logging import configure_logging, get_logger
from structkit.core.notation import parse_field, parse_type, schema_from_notation

__all__ = [
    "DEFAULT_SETTINGS",
    "ToolkitSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
    "parse_field",
    "parse_type",
    "schema_from_notation",
]
