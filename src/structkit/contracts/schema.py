"""Schema model: immutable record shapes and their field specs.

This module is the vocabulary every other component consumes:
- Type kinds: Primitive, ArrayOf, RecordOf, UnionOf, LiteralOf
- FieldSpec: a type kind plus optional/readonly constraints
- Schema: ordered, immutable mapping of field name to FieldSpec
- SchemaRef: bind-once forward reference for recursive shapes

All types use the frozen dataclass pattern; "mutations" return new instances.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from structkit.contracts.enums import PrimitiveKind, SchemaErrorReason
from structkit.contracts.errors import SchemaError


@dataclass(frozen=True, slots=True)
class Primitive:
    """A primitive kind such as ``string`` or ``number``."""

    kind: PrimitiveKind


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """Homogeneous array whose elements all match ``element``."""

    element: TypeKind


@dataclass(frozen=True, slots=True)
class RecordOf:
    """Nested record validated against ``schema``.

    ``schema`` may be a SchemaRef to allow self-referencing shapes; use
    ``target`` to obtain the concrete Schema.
    """

    schema: Schema | SchemaRef

    @property
    def target(self) -> Schema:
        """Concrete schema, dereferencing a SchemaRef if needed.

        Raises:
            SchemaError: If the reference was never bound
        """
        if isinstance(self.schema, SchemaRef):
            return self.schema.resolve()
        return self.schema


@dataclass(frozen=True, slots=True)
class UnionOf:
    """Value must match at least one alternative.

    Invariant: at least two distinct alternatives. Nested unions are
    flattened so ``UnionOf`` never contains another ``UnionOf``.
    """

    alternatives: tuple[TypeKind, ...]

    def __post_init__(self) -> None:
        flat: list[TypeKind] = []
        for alt in self.alternatives:
            members = alt.alternatives if isinstance(alt, UnionOf) else (alt,)
            for member in members:
                if member not in flat:
                    flat.append(member)
        if len(flat) < 2:
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"Union requires at least two distinct alternatives, got {len(flat)}",
            )
        object.__setattr__(self, "alternatives", tuple(flat))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnionOf):
            return NotImplemented
        return frozenset(self.alternatives) == frozenset(other.alternatives)

    def __hash__(self) -> int:
        return hash(frozenset(self.alternatives))


def _literal_key(value: Any) -> tuple[bool, Any]:
    # True == 1 and hash(True) == hash(1); the flag keeps them apart
    return (isinstance(value, bool), value)


@dataclass(frozen=True, slots=True, eq=False)
class LiteralOf:
    """Value must be one of a fixed set of constants.

    Membership is exact: ``True`` does not match the literal ``1``. Pass the
    constants as a list or tuple when they mix booleans with ``0``/``1``; a
    plain set has already merged them before it gets here.

    Attributes:
        values: Distinct constants in first-seen order
    """

    values: tuple[Any, ...]
    _keys: frozenset[tuple[bool, Any]] = field(init=False, default=frozenset(), repr=False, compare=False)

    def __post_init__(self) -> None:
        distinct: dict[tuple[bool, Any], Any] = {}
        for value in self.values:
            distinct.setdefault(_literal_key(value), value)
        if not distinct:
            raise SchemaError(SchemaErrorReason.MALFORMED_FIELD, "Literal type requires at least one value")
        object.__setattr__(self, "values", tuple(distinct.values()))
        object.__setattr__(self, "_keys", frozenset(distinct))

    def admits(self, value: Any) -> bool:
        """Exact-value membership, distinguishing bool from int."""
        key = _literal_key(value)
        return any(key == candidate for candidate in self._keys)

    def issubset(self, other: LiteralOf) -> bool:
        """True if every constant here is also a constant of ``other``."""
        return self._keys <= other._keys

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LiteralOf):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)


TypeKind: TypeAlias = Primitive | ArrayOf | RecordOf | UnionOf | LiteralOf

_TYPE_KINDS = (Primitive, ArrayOf, RecordOf, UnionOf, LiteralOf)

# Shorthand instances for the common primitives
STRING = Primitive(PrimitiveKind.STRING)
NUMBER = Primitive(PrimitiveKind.NUMBER)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
NULL = Primitive(PrimitiveKind.NULL)
UNDEFINED_KIND = Primitive(PrimitiveKind.UNDEFINED)
FUNCTION = Primitive(PrimitiveKind.FUNCTION)
OBJECT = Primitive(PrimitiveKind.OBJECT)
ANY = Primitive(PrimitiveKind.ANY)


def is_type_kind(value: Any) -> bool:
    """True if value is one of the type-kind variants."""
    return isinstance(value, _TYPE_KINDS)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Type and constraints for a single field.

    Attributes:
        type_kind: What values the field accepts
        optional: If True, the field may be absent
        readonly: If True, assignment after validation is rejected
    """

    type_kind: TypeKind
    optional: bool = False
    readonly: bool = False

    def __post_init__(self) -> None:
        if not is_type_kind(self.type_kind):
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"FieldSpec type_kind must be a type kind, got {type(self.type_kind).__name__}",
            )

    def with_flags(self, *, optional: bool | None = None, readonly: bool | None = None) -> FieldSpec:
        """Return a copy with the given flags replaced."""
        return FieldSpec(
            type_kind=self.type_kind,
            optional=self.optional if optional is None else optional,
            readonly=self.readonly if readonly is None else readonly,
        )

    def with_type(self, type_kind: TypeKind) -> FieldSpec:
        """Return a copy with a different type kind and the same flags."""
        return FieldSpec(type_kind=type_kind, optional=self.optional, readonly=self.readonly)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": describe_kind(self.type_kind),
            "optional": self.optional,
            "readonly": self.readonly,
        }


class SchemaRef:
    """Forward reference to a schema that is bound later.

    Lets a schema refer to itself (trees, linked lists). A ref may be bound
    exactly once; using it before binding is a programming error.
    Equality is identity.
    """

    __slots__ = ("_name", "_target")

    def __init__(self, name: str) -> None:
        self._name = name
        self._target: Schema | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_bound(self) -> bool:
        return self._target is not None

    def bind(self, schema: Schema) -> Schema:
        """Bind the reference to its schema.

        Returns:
            The bound schema, for chaining

        Raises:
            SchemaError: If already bound
        """
        if self._target is not None:
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"Schema reference '{self._name}' is already bound",
            )
        self._target = schema
        return schema

    def resolve(self) -> Schema:
        """Return the bound schema.

        Raises:
            SchemaError: If the reference was never bound
        """
        if self._target is None:
            raise SchemaError(
                SchemaErrorReason.UNFINALIZED_REFERENCE,
                f"Schema reference '{self._name}' was used before being bound",
                keys=(self._name,),
            )
        return self._target

    def __repr__(self) -> str:
        state = "bound" if self._target is not None else "unbound"
        return f"SchemaRef({self._name!r}, {state})"


FieldSpecInput: TypeAlias = FieldSpec | TypeKind


def _as_field_spec(name: str, spec: Any) -> FieldSpec:
    if isinstance(spec, FieldSpec):
        return spec
    if is_type_kind(spec):
        return FieldSpec(type_kind=spec)
    raise SchemaError(
        SchemaErrorReason.MALFORMED_FIELD,
        f"Field '{name}' must be a FieldSpec or type kind, got {type(spec).__name__}",
        keys=(name,),
    )


@dataclass(frozen=True, slots=True, eq=False)
class Schema:
    """Immutable description of a record shape.

    Field order is preserved for iteration and violation ordering but does
    not take part in equality: two schemas are equal when they declare the
    same field names with equal FieldSpecs.

    Attributes:
        entries: Ordered (name, FieldSpec) pairs
        name: Optional label used in diagnostics (not part of equality)
    """

    entries: tuple[tuple[str, FieldSpec], ...]
    name: str | None = None

    _by_name: dict[str, FieldSpec] = field(init=False, default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Build the O(1) lookup index.

        Raises:
            SchemaError: If names are duplicated or not strings
        """
        index: dict[str, FieldSpec] = {}
        for field_name, spec in self.entries:
            if not isinstance(field_name, str) or not field_name:
                raise SchemaError(
                    SchemaErrorReason.MALFORMED_FIELD,
                    f"Field names must be non-empty strings, got {field_name!r}",
                )
            if field_name in index:
                raise SchemaError(
                    SchemaErrorReason.DUPLICATE_FIELD,
                    f"Duplicate field name in schema: {field_name}",
                    keys=(field_name,),
                )
            index[field_name] = _as_field_spec(field_name, spec)
        object.__setattr__(self, "entries", tuple(index.items()))
        object.__setattr__(self, "_by_name", index)

    @classmethod
    def build(
        cls,
        field_specs: Mapping[str, FieldSpecInput] | Iterable[tuple[str, FieldSpecInput]],
        *,
        name: str | None = None,
    ) -> Schema:
        """Construct a schema from a literal field list.

        A bare type kind is accepted as shorthand for a required, mutable field.

        Args:
            field_specs: Mapping or iterable of (name, spec) pairs
            name: Optional diagnostic label

        Raises:
            SchemaError: If a spec is malformed or a name is duplicated
        """
        pairs = field_specs.items() if isinstance(field_specs, Mapping) else field_specs
        return cls(entries=tuple((n, _as_field_spec(n, s)) for n, s in pairs), name=name)

    def fields(self) -> tuple[str, ...]:
        """Field names in declaration order."""
        return tuple(self._by_name)

    def get(self, name: str) -> FieldSpec:
        """Get the FieldSpec for a field.

        Raises:
            SchemaError: UNKNOWN_FIELD if the schema has no such field
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise SchemaError(
                SchemaErrorReason.UNKNOWN_FIELD,
                f"'{name}' is not a field of {self.label}",
                keys=(name,),
            ) from None

    def items(self) -> tuple[tuple[str, FieldSpec], ...]:
        return self.entries

    @property
    def label(self) -> str:
        return self.name or "schema"

    def renamed(self, name: str | None) -> Schema:
        """Return the same shape under a different diagnostic label."""
        return Schema(entries=self.entries, name=name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._by_name == other._by_name

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))

    def describe(self) -> str:
        """TypeScript-like rendering, e.g. ``{ id: number; name?: string }``."""
        parts = []
        for field_name, spec in self.entries:
            prefix = "readonly " if spec.readonly else ""
            marker = "?" if spec.optional else ""
            parts.append(f"{prefix}{field_name}{marker}: {describe_kind(spec.type_kind)}")
        return "{ " + "; ".join(parts) + " }" if parts else "{}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and presentation."""
        return {
            "name": self.name,
            "fields": {field_name: spec.to_dict() for field_name, spec in self.entries},
        }


def describe_kind(type_kind: TypeKind) -> str:
    """Render a type kind the way it would be written in a type annotation."""
    if isinstance(type_kind, Primitive):
        return str(type_kind.kind)
    if isinstance(type_kind, ArrayOf):
        inner = describe_kind(type_kind.element)
        if isinstance(type_kind.element, (UnionOf, LiteralOf)):
            inner = f"({inner})"
        return f"{inner}[]"
    if isinstance(type_kind, RecordOf):
        if isinstance(type_kind.schema, SchemaRef):
            return type_kind.schema.name
        return type_kind.schema.name or type_kind.schema.describe()
    if isinstance(type_kind, UnionOf):
        return " | ".join(describe_kind(alt) for alt in type_kind.alternatives)
    return " | ".join(sorted(repr(v) for v in type_kind.values))
