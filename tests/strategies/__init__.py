# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import schemas, STANDARD_SETTINGS
"""

from tests.strategies.schemas import (
    field_names,
    field_specs,
    primitive_kinds,
    schemas,
    schemas_with_keys,
    type_kinds,
    values_for,
)
from tests.strategies.settings import QUICK_SETTINGS, STANDARD_SETTINGS, THOROUGH_SETTINGS

__all__ = [
    "QUICK_SETTINGS",
    "STANDARD_SETTINGS",
    "THOROUGH_SETTINGS",
    "field_names",
    "field_specs",
    "primitive_kinds",
    "schemas",
    "schemas_with_keys",
    "type_kinds",
    "values_for",
]
