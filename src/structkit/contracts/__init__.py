"""Shared contracts for schema types, enums, errors, and results.

This package is a LEAF MODULE with no outbound dependencies to core/engine.

Import patterns:
    # Contracts (lightweight, no heavy dependencies)
    from structkit.contracts import Schema, FieldSpec, Violation

    # Settings classes (from core, pulls in pydantic/dynaconf)
    from structkit.core.config import ToolkitSettings
"""

from structkit.contracts.enums import (
    ABSENT_KINDS,
    PrimitiveKind,
    SchemaErrorReason,
    ValidationMode,
    ViolationKind,
)
from structkit.contracts.errors import SchemaError, UnmatchedVariant
from structkit.contracts.kinds import UNDEFINED, is_record_like, kind_of, lookup_field, shape_of
from structkit.contracts.results import FieldPath, Invalid, Valid, ValidationResult, Violation
from structkit.contracts.schema import (
    ANY,
    BOOLEAN,
    FUNCTION,
    NULL,
    NUMBER,
    OBJECT,
    STRING,
    UNDEFINED_KIND,
    ArrayOf,
    FieldSpec,
    LiteralOf,
    Primitive,
    RecordOf,
    Schema,
    SchemaRef,
    TypeKind,
    UnionOf,
    describe_kind,
    is_type_kind,
)

__all__ = [
    "ABSENT_KINDS",
    "ANY",
    "BOOLEAN",
    "FUNCTION",
    "NULL",
    "NUMBER",
    "OBJECT",
    "STRING",
    "UNDEFINED",
    "UNDEFINED_KIND",
    "ArrayOf",
    "FieldPath",
    "FieldSpec",
    "Invalid",
    "LiteralOf",
    "Primitive",
    "PrimitiveKind",
    "RecordOf",
    "Schema",
    "SchemaError",
    "SchemaErrorReason",
    "SchemaRef",
    "TypeKind",
    "UnionOf",
    "UnmatchedVariant",
    "Valid",
    "ValidationMode",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "describe_kind",
    "is_record_like",
    "is_type_kind",
    "kind_of",
    "lookup_field",
    "shape_of",
]
