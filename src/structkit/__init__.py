"""structkit: a runtime structural schema toolkit.

Describe record shapes, derive new shapes with utility-type transforms
(Partial, Required, Readonly, Pick, Omit, Record, Extract, Exclude,
NonNullable, Mapped, intersections), validate values with excess-property
and readonly-assignment checks, dispatch over heterogeneous values with
type guards, and resolve structural-subtype conditionals.

Example:
    from structkit import NUMBER, STRING, Schema, transforms, validate

    person = Schema.build({"id": NUMBER, "firstName": STRING, "lastName": STRING})
    names = transforms.pick(person, ["firstName", "lastName"])
    validate(names, {"firstName": "John", "lastName": "Doe"}).ok  # True
"""

from structkit.contracts import (
    ANY,
    BOOLEAN,
    FUNCTION,
    NULL,
    NUMBER,
    OBJECT,
    STRING,
    UNDEFINED,
    UNDEFINED_KIND,
    ArrayOf,
    FieldSpec,
    Invalid,
    LiteralOf,
    Primitive,
    PrimitiveKind,
    RecordOf,
    Schema,
    SchemaError,
    SchemaErrorReason,
    SchemaRef,
    UnionOf,
    UnmatchedVariant,
    Valid,
    ValidationMode,
    ValidationResult,
    Violation,
    ViolationKind,
)
from structkit.core import ToolkitSettings, configure_logging, load_settings, schema_from_notation
from structkit.engine import (
    ConditionalQuery,
    ConditionalResolver,
    Dispatcher,
    GuardCase,
    HasField,
    HasTag,
    IsKind,
    ValidatedRecord,
    Validator,
    dispatch,
    is_boolean,
    is_numeric,
    is_structural_subtype,
    is_textual,
    otherwise,
    resolve,
    transforms,
    validate,
    validate_assignment,
    when,
)

__version__ = "0.1.0"

__all__ = [
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
    "ConditionalQuery",
    "ConditionalResolver",
    "Dispatcher",
    "FieldSpec",
    "GuardCase",
    "HasField",
    "HasTag",
    "Invalid",
    "IsKind",
    "LiteralOf",
    "Primitive",
    "PrimitiveKind",
    "RecordOf",
    "Schema",
    "SchemaError",
    "SchemaErrorReason",
    "SchemaRef",
    "ToolkitSettings",
    "UnionOf",
    "UnmatchedVariant",
    "Valid",
    "ValidatedRecord",
    "ValidationMode",
    "ValidationResult",
    "Validator",
    "Violation",
    "ViolationKind",
    "configure_logging",
    "dispatch",
    "is_boolean",
    "is_numeric",
    "is_structural_subtype",
    "is_textual",
    "load_settings",
    "otherwise",
    "resolve",
    "schema_from_notation",
    "transforms",
    "validate",
    "validate_assignment",
    "when",
]
