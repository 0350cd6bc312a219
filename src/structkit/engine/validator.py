# src/structkit/engine/validator.py
"""Validate values against schemas.

Violations are collected exhaustively rather than failing fast, so a caller
can report every problem from one pass. Per declared field, in schema order:

1. Absent and not optional -> MISSING_FIELD
2. Present -> recursive type check -> TYPE_MISMATCH
3. Readonly and written by a mutation attempt -> READONLY_ASSIGNMENT

Then, in strict mode, every key of a mapping value that the schema does not
declare -> UNEXPECTED_FIELD (in the value's key order).

Data problems never raise. Only a malformed schema (an unbound SchemaRef)
raises SchemaError, since that is a programming fault rather than bad data.
"""

from __future__ import annotations

import types
from collections.abc import Iterator, Mapping
from typing import Any

import structlog

from structkit.contracts.enums import PrimitiveKind, ValidationMode, ViolationKind
from structkit.contracts.kinds import UNDEFINED, is_record_like, kind_of, lookup_field
from structkit.contracts.results import FieldPath, Invalid, Valid, ValidationResult, Violation
from structkit.contracts.schema import (
    ArrayOf,
    LiteralOf,
    Primitive,
    RecordOf,
    Schema,
    TypeKind,
    UnionOf,
    describe_kind,
)
from structkit.core.config import DEFAULT_SETTINGS, ToolkitSettings

logger = structlog.get_logger(__name__)

# `object` accepts any non-primitive value
_NON_PRIMITIVE_KINDS = frozenset({PrimitiveKind.OBJECT, PrimitiveKind.ARRAY, PrimitiveKind.FUNCTION})


def _mismatch(path: FieldPath, expected: str, value: Any) -> Violation:
    actual = kind_of(value)
    if actual in (PrimitiveKind.STRING, PrimitiveKind.NUMBER, PrimitiveKind.BOOLEAN):
        got = f"{actual} {value!r}"
    elif actual is PrimitiveKind.OBJECT and not is_record_like(value):
        got = f"{actual} ({type(value).__name__})"
    else:
        got = str(actual)
    return Violation(field_path=path, kind=ViolationKind.TYPE_MISMATCH, detail=f"expected {expected}, got {got}")


class Validator:
    """Checks values against schemas using a fixed set of settings.

    Stateless apart from its settings, so one instance can be shared freely
    between threads.
    """

    def __init__(self, settings: ToolkitSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS

    @property
    def settings(self) -> ToolkitSettings:
        return self._settings

    def _resolve_mode(self, mode: ValidationMode | str | None) -> ValidationMode:
        if mode is None:
            return self._settings.validation_mode
        return ValidationMode(mode)

    def validate(self, schema: Schema, value: Any, mode: ValidationMode | str | None = None) -> ValidationResult:
        """Validate ``value`` against ``schema``.

        Args:
            schema: Shape to check against
            value: Mapping or object to check
            mode: strict/lenient; defaults to settings.validation_mode

        Returns:
            Valid(value) or Invalid(violations)

        Raises:
            SchemaError: If the schema references an unbound SchemaRef
        """
        resolved = self._resolve_mode(mode)
        violations = self._check_record(schema, value, resolved, (), frozenset())
        return self._finish(schema, value, violations, resolved)

    def validate_assignment(
        self,
        schema: Schema,
        instance: Mapping[str, Any],
        changes: Mapping[str, Any],
        mode: ValidationMode | str | None = None,
    ) -> ValidationResult:
        """Validate writing ``changes`` into an already validated instance.

        The merged value is validated as a whole, and every changed field
        that is readonly yields READONLY_ASSIGNMENT. The instance itself is
        never modified.

        Returns:
            Valid(merged dict) or Invalid(violations)

        Raises:
            TypeError: If instance is not a mapping
        """
        if not isinstance(instance, Mapping):
            raise TypeError(f"Assignment target must be a mapping, got {type(instance).__name__}")
        resolved = self._resolve_mode(mode)
        merged = {**instance, **changes}
        violations = self._check_record(schema, merged, resolved, (), frozenset(changes))
        return self._finish(schema, merged, violations, resolved)

    def validate_record(
        self,
        schema: Schema,
        value: Mapping[str, Any],
        mode: ValidationMode | str | None = None,
    ) -> ValidationResult:
        """Validate a mapping and wrap it as an immutable ValidatedRecord.

        Returns:
            Valid(ValidatedRecord) or Invalid(violations)
        """
        resolved = self._resolve_mode(mode)
        result = self.validate(schema, value, resolved)
        if isinstance(result, Invalid):
            return result
        return Valid(ValidatedRecord(schema, value, mode=resolved, validator=self))

    def _finish(
        self, schema: Schema, value: Any, violations: list[Violation], mode: ValidationMode
    ) -> ValidationResult:
        if violations:
            logger.debug(
                "validation_failed",
                schema=schema.label,
                mode=str(mode),
                violations=len(violations),
                kinds=sorted({str(v.kind) for v in violations}),
            )
            return Invalid(tuple(violations))
        return Valid(value)

    def _check_record(
        self,
        schema: Schema,
        value: Any,
        mode: ValidationMode,
        path: FieldPath,
        assigned: frozenset[str],
    ) -> list[Violation]:
        if not is_record_like(value):
            return [_mismatch(path, describe_kind(RecordOf(schema)), value)]

        violations: list[Violation] = []
        for name, spec in schema.items():
            field_path = (*path, name)
            field_value = lookup_field(value, name)
            if field_value is UNDEFINED:
                if not spec.optional:
                    violations.append(
                        Violation(
                            field_path=field_path,
                            kind=ViolationKind.MISSING_FIELD,
                            detail=f"required field '{name}' of {schema.label} is missing",
                        )
                    )
            else:
                violations.extend(self._check_kind(spec.type_kind, field_value, mode, field_path))

            if spec.readonly and name in assigned:
                violations.append(
                    Violation(
                        field_path=field_path,
                        kind=ViolationKind.READONLY_ASSIGNMENT,
                        detail=f"cannot assign to '{name}' because it is a read-only property",
                    )
                )

        # Excess-property check only applies to mappings; objects expose
        # methods and inherited attributes that are not declared data.
        if mode is ValidationMode.STRICT and isinstance(value, Mapping):
            for key in value:
                if key not in schema:
                    violations.append(
                        Violation(
                            field_path=(*path, str(key)),
                            kind=ViolationKind.UNEXPECTED_FIELD,
                            detail=f"'{key}' does not exist in type {schema.label}",
                        )
                    )
        return violations

    def _check_kind(self, type_kind: TypeKind, value: Any, mode: ValidationMode, path: FieldPath) -> list[Violation]:
        if isinstance(type_kind, Primitive):
            expected = type_kind.kind
            actual = kind_of(value)
            if expected is PrimitiveKind.ANY or actual is expected:
                return []
            if expected is PrimitiveKind.OBJECT and actual in _NON_PRIMITIVE_KINDS:
                return []
            return [_mismatch(path, str(expected), value)]

        if isinstance(type_kind, ArrayOf):
            if kind_of(value) is not PrimitiveKind.ARRAY:
                return [_mismatch(path, describe_kind(type_kind), value)]
            violations: list[Violation] = []
            for index, item in enumerate(value):
                violations.extend(self._check_kind(type_kind.element, item, mode, (*path, index)))
            return violations

        if isinstance(type_kind, RecordOf):
            nested_mode = mode if self._settings.nested_strict else ValidationMode.LENIENT
            return self._check_record(type_kind.target, value, nested_mode, path, frozenset())

        if isinstance(type_kind, UnionOf):
            for alternative in type_kind.alternatives:
                if not self._check_kind(alternative, value, mode, path):
                    return []
            return [_mismatch(path, describe_kind(type_kind), value)]

        if isinstance(type_kind, LiteralOf):
            if type_kind.admits(value):
                return []
            return [_mismatch(path, describe_kind(type_kind), value)]

        raise TypeError(f"Unknown type kind: {type(type_kind).__name__}")


class ValidatedRecord(Mapping[str, Any]):
    """Immutable view of a mapping that passed validation.

    Direct item assignment is refused; changes go through with_values(),
    which re-validates and enforces readonly fields.
    """

    __slots__ = ("_data", "_mode", "_schema", "_validator")

    def __init__(
        self,
        schema: Schema,
        data: Mapping[str, Any],
        *,
        mode: ValidationMode,
        validator: Validator,
    ) -> None:
        self._data = types.MappingProxyType(dict(data))
        self._schema = schema
        self._mode = mode
        self._validator = validator

    @property
    def schema(self) -> Schema:
        return self._schema

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setitem__(self, key: str, value: Any) -> None:
        raise TypeError("ValidatedRecord is immutable - use with_values() to derive an updated record")

    def __getattr__(self, key: str) -> Any:
        # Prevent infinite recursion for private attributes
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._data[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __repr__(self) -> str:
        return f"ValidatedRecord({self._schema.label}, {dict(self._data)!r})"

    def with_values(self, **changes: Any) -> ValidationResult:
        """Derive a new record with ``changes`` applied.

        Returns:
            Valid(new ValidatedRecord) or Invalid, including
            READONLY_ASSIGNMENT for any readonly field written
        """
        result = self._validator.validate_assignment(self._schema, self._data, changes, self._mode)
        if isinstance(result, Invalid):
            return result
        return Valid(ValidatedRecord(self._schema, result.value, mode=self._mode, validator=self._validator))

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


_default_validator = Validator()


def validate(schema: Schema, value: Any, mode: ValidationMode | str | None = None) -> ValidationResult:
    """Validate with default settings. See Validator.validate."""
    return _default_validator.validate(schema, value, mode)


def validate_assignment(
    schema: Schema,
    instance: Mapping[str, Any],
    changes: Mapping[str, Any],
    mode: ValidationMode | str | None = None,
) -> ValidationResult:
    """Validate a mutation attempt with default settings. See Validator.validate_assignment."""
    return _default_validator.validate_assignment(schema, instance, changes, mode)
