"""Schema engine: transformation, validation, dispatch, and conditional resolution."""

from structkit.engine import transforms
from structkit.engine.dispatch import (
    Always,
    Dispatcher,
    GuardCase,
    HasField,
    HasTag,
    IsKind,
    dispatch,
    is_boolean,
    is_numeric,
    is_textual,
    otherwise,
    when,
)
from structkit.engine.resolver import ConditionalQuery, ConditionalResolver, is_structural_subtype, resolve
from structkit.engine.validator import ValidatedRecord, Validator, validate, validate_assignment

__all__ = [
    "Always",
    "ConditionalQuery",
    "ConditionalResolver",
    "Dispatcher",
    "GuardCase",
    "HasField",
    "HasTag",
    "IsKind",
    "ValidatedRecord",
    "Validator",
    "dispatch",
    "is_boolean",
    "is_numeric",
    "is_structural_subtype",
    "is_textual",
    "otherwise",
    "resolve",
    "transforms",
    "validate",
    "validate_assignment",
    "when",
]
