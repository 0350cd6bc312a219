# src/structkit/engine/transforms.py
"""Schema transformations (the utility-type family).

Every function here is pure: it takes one or two Schemas (plus selectors)
and returns a NEW Schema. Inputs are never mutated, and a failed transform
raises SchemaError before building anything, so there is no partial result.

Derived schemas are labelled after the operation that produced them
(e.g. ``Pick<PickType, firstName | lastName>``) for readable diagnostics.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from structkit.contracts.enums import ABSENT_KINDS, SchemaErrorReason
from structkit.contracts.errors import SchemaError
from structkit.contracts.schema import (
    FieldSpec,
    Primitive,
    RecordOf,
    Schema,
    SchemaRef,
    TypeKind,
    UnionOf,
    describe_kind,
    is_type_kind,
)

logger = structlog.get_logger(__name__)

MapFn = Callable[[TypeKind], TypeKind | FieldSpec]


def _label(op: str, *parts: str | None) -> str:
    return f"{op}<{', '.join(p or 'schema' for p in parts)}>"


def _unique_keys(keys: Iterable[str]) -> tuple[str, ...]:
    if isinstance(keys, str):
        # A bare string would otherwise be split into characters
        keys = (keys,)
    return tuple(dict.fromkeys(keys))


def _check_known(schema: Schema, keys: tuple[str, ...], op: str) -> None:
    unknown = [k for k in keys if k not in schema]
    if unknown:
        raise SchemaError(
            SchemaErrorReason.UNKNOWN_KEY,
            f"{op}: {', '.join(repr(k) for k in unknown)} not in {schema.label}. "
            f"Known fields are: {', '.join(schema.fields())}.",
            keys=unknown,
        )


def _with_all_flags(schema: Schema, op: str, **flags: bool) -> Schema:
    result = Schema.build(
        ((name, spec.with_flags(**flags)) for name, spec in schema.items()),
        name=_label(op, schema.name),
    )
    logger.debug("schema_transformed", op=op, source=schema.label, fields=len(result))
    return result


def partial(schema: Schema) -> Schema:
    """Make every field optional."""
    return _with_all_flags(schema, "Partial", optional=True)


def required(schema: Schema) -> Schema:
    """Make every field required.

    Missing fields are reported later by the validator, not here.
    """
    return _with_all_flags(schema, "Required", optional=False)


def readonly(schema: Schema) -> Schema:
    """Mark every field readonly."""
    return _with_all_flags(schema, "Readonly", readonly=True)


def pick(schema: Schema, keys: Iterable[str]) -> Schema:
    """Keep exactly ``keys``, in the order given.

    Raises:
        SchemaError: UNKNOWN_KEY if any key is not a field of ``schema``
    """
    selected = _unique_keys(keys)
    _check_known(schema, selected, "Pick")
    return Schema.build(
        ((k, schema.get(k)) for k in selected),
        name=_label("Pick", schema.name, " | ".join(selected)),
    )


def omit(schema: Schema, keys: Iterable[str]) -> Schema:
    """Keep every field except ``keys``, in schema order.

    Raises:
        SchemaError: UNKNOWN_KEY if any key is not a field of ``schema``
    """
    dropped = _unique_keys(keys)
    _check_known(schema, dropped, "Omit")
    return Schema.build(
        ((name, spec) for name, spec in schema.items() if name not in dropped),
        name=_label("Omit", schema.name, " | ".join(dropped)),
    )


def record(keys: Iterable[str], value: Schema | SchemaRef | TypeKind) -> Schema:
    """Schema whose fields are exactly ``keys``, each typed ``value``.

    A Schema value becomes a nested record; a type kind is used as-is.
    No field is optional or readonly.
    """
    if isinstance(value, (Schema, SchemaRef)):
        type_kind: TypeKind = RecordOf(value)
    elif is_type_kind(value):
        type_kind = value
    else:
        raise SchemaError(
            SchemaErrorReason.MALFORMED_FIELD,
            f"Record value must be a Schema or type kind, got {type(value).__name__}",
        )
    selected = _unique_keys(keys)
    return Schema.build(
        ((k, FieldSpec(type_kind=type_kind)) for k in selected),
        name=_label("Record", " | ".join(selected), describe_kind(type_kind)),
    )


def extract(first: Schema, second: Schema) -> Schema:
    """Fields present in both schemas; specs and order come from ``first``."""
    return Schema.build(
        ((name, spec) for name, spec in first.items() if name in second),
        name=_label("Extract", first.name, second.name),
    )


def exclude(first: Schema, second: Schema) -> Schema:
    """Fields of ``first`` that are absent from ``second``."""
    return Schema.build(
        ((name, spec) for name, spec in first.items() if name not in second),
        name=_label("Exclude", first.name, second.name),
    )


def non_nullable(spec: FieldSpec) -> FieldSpec:
    """Remove null/undefined alternatives from a field's type.

    A union left with one alternative collapses to that alternative.
    Non-union types that are not themselves absent pass through unchanged.

    Raises:
        SchemaError: EMPTY_UNION if nothing but absent kinds remain
    """
    type_kind = spec.type_kind
    if isinstance(type_kind, UnionOf):
        survivors = tuple(
            alt for alt in type_kind.alternatives if not (isinstance(alt, Primitive) and alt.kind in ABSENT_KINDS)
        )
    elif isinstance(type_kind, Primitive) and type_kind.kind in ABSENT_KINDS:
        survivors = ()
    else:
        return spec

    if not survivors:
        raise SchemaError(
            SchemaErrorReason.EMPTY_UNION,
            f"NonNullable<{describe_kind(type_kind)}> leaves no alternatives",
        )
    if len(survivors) == 1:
        return spec.with_type(survivors[0])
    return spec.with_type(UnionOf(survivors))


def mapped(
    schema: Schema,
    map_fn: MapFn,
    *,
    preserve_optional: bool = True,
    preserve_readonly: bool = True,
) -> Schema:
    """Rewrite every field's type with ``map_fn``; field names are unchanged.

    ``map_fn`` receives the original type kind and returns either a type
    kind or a full FieldSpec. Flag handling:

    - preserve_* True: the original flag passes through
    - preserve_* False: the flag comes from a returned FieldSpec, or is
      cleared when ``map_fn`` returned a bare type kind

    Raises:
        SchemaError: MALFORMED_FIELD if ``map_fn`` returns something else
    """
    entries: list[tuple[str, FieldSpec]] = []
    for name, spec in schema.items():
        produced = map_fn(spec.type_kind)
        if isinstance(produced, FieldSpec):
            new_type = produced.type_kind
            mapped_optional, mapped_readonly = produced.optional, produced.readonly
        elif is_type_kind(produced):
            new_type = produced
            mapped_optional = mapped_readonly = False
        else:
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"Mapped function returned {type(produced).__name__} for field '{name}'",
                keys=(name,),
            )
        entries.append(
            (
                name,
                FieldSpec(
                    type_kind=new_type,
                    optional=spec.optional if preserve_optional else mapped_optional,
                    readonly=spec.readonly if preserve_readonly else mapped_readonly,
                ),
            )
        )
    return Schema.build(entries, name=_label("Mapped", schema.name))


def intersect(first: Schema, second: Schema) -> Schema:
    """Combine two shapes into one carrying every field of both (``A & B``).

    Rules:
    1. Fields in only one schema are copied unchanged
    2. Shared fields must have equal type kinds (error if not)
    3. A shared field is optional only if optional on both sides, and
       readonly if readonly on either side

    Raises:
        SchemaError: INCOMPATIBLE_FIELDS if a shared field's types differ
    """
    conflicts = [
        name for name, spec in first.items() if name in second and second.get(name).type_kind != spec.type_kind
    ]
    if conflicts:
        raise SchemaError(
            SchemaErrorReason.INCOMPATIBLE_FIELDS,
            f"Cannot intersect {first.label} and {second.label}: conflicting types for {', '.join(conflicts)}",
            keys=conflicts,
        )

    merged: dict[str, FieldSpec] = dict(first.items())
    for name, spec in second.items():
        if name in merged:
            existing = merged[name]
            merged[name] = existing.with_flags(
                optional=existing.optional and spec.optional,
                readonly=existing.readonly or spec.readonly,
            )
        else:
            merged[name] = spec
    return Schema.build(merged, name=f"{first.label} & {second.label}")
