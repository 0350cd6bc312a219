"""All kinds and modes used across subsystem boundaries.

Every enum here is a StrEnum so values render cleanly in violation
details and structured log output.
"""

from enum import StrEnum


class PrimitiveKind(StrEnum):
    """Runtime primitive kind of a value.

    Mirrors the categories a ``typeof``-style check can distinguish.
    ``ARRAY`` and ``OBJECT`` are both non-primitive containers but are
    kept apart so diagnostics can say which one was found.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    FUNCTION = "function"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"


# Kinds that denote absence; stripped by non_nullable().
ABSENT_KINDS: frozenset[PrimitiveKind] = frozenset({PrimitiveKind.NULL, PrimitiveKind.UNDEFINED})


class ViolationKind(StrEnum):
    """Kind of data violation reported by the validator."""

    MISSING_FIELD = "missing_field"
    UNEXPECTED_FIELD = "unexpected_field"
    TYPE_MISMATCH = "type_mismatch"
    READONLY_ASSIGNMENT = "readonly_assignment"


class ValidationMode(StrEnum):
    """Excess-property handling.

    - STRICT: keys not declared in the schema are violations
    - LENIENT: undeclared keys are ignored
    """

    STRICT = "strict"
    LENIENT = "lenient"


class SchemaErrorReason(StrEnum):
    """Why a schema construction or transformation was rejected."""

    UNKNOWN_KEY = "unknown_key"
    UNKNOWN_FIELD = "unknown_field"
    EMPTY_UNION = "empty_union"
    MALFORMED_FIELD = "malformed_field"
    DUPLICATE_FIELD = "duplicate_field"
    INCOMPATIBLE_FIELDS = "incompatible_fields"
    UNFINALIZED_REFERENCE = "unfinalized_reference"
