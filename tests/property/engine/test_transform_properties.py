# tests/property/engine/test_transform_properties.py
"""Property-based tests for the schema transforms.

Laws verified:
- Pick and Omit over the same keys partition a schema's fields
- Extract and Exclude partition the first schema's fields
- Partial, Required and Readonly are idempotent and keep types
- NonNullable never leaves an absent kind behind
- Record yields exactly the requested keys with a uniform spec
- Mapped with the identity function is the identity
- Inputs are never mutated
"""

from __future__ import annotations

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from structkit.contracts import (
    ABSENT_KINDS,
    NULL,
    UNDEFINED_KIND,
    FieldSpec,
    Primitive,
    Schema,
    SchemaError,
    UnionOf,
)
from structkit.engine import transforms
from tests.strategies import (
    QUICK_SETTINGS,
    STANDARD_SETTINGS,
    THOROUGH_SETTINGS,
    field_names,
    primitive_kinds,
    schemas,
    schemas_with_keys,
    type_kinds,
)


class TestPickOmitPartition:
    """Pick(keys) and Omit(keys) split a schema cleanly."""

    @given(data=schemas_with_keys())
    @THOROUGH_SETTINGS
    def test_partition(self, data: tuple[Schema, list[str]]) -> None:
        schema, keys = data

        picked = transforms.pick(schema, keys)
        omitted = transforms.omit(schema, keys)

        assert set(picked.fields()) | set(omitted.fields()) == set(schema.fields())
        assert set(picked.fields()).isdisjoint(omitted.fields())

    @given(data=schemas_with_keys())
    @STANDARD_SETTINGS
    def test_specs_unchanged(self, data: tuple[Schema, list[str]]) -> None:
        schema, keys = data

        picked = transforms.pick(schema, keys)

        assert picked.fields() == tuple(keys)
        for name in picked:
            assert picked.get(name) == schema.get(name)

    @given(schema=schemas, extra=field_names)
    @QUICK_SETTINGS
    def test_unknown_key_rejected(self, schema: Schema, extra: str) -> None:
        assume(extra not in schema)

        with pytest.raises(SchemaError):
            transforms.pick(schema, [extra])
        with pytest.raises(SchemaError):
            transforms.omit(schema, [extra])


class TestExtractExcludePartition:
    """Extract(A, B) and Exclude(A, B) split A by membership in B."""

    @given(first=schemas, second=schemas)
    @THOROUGH_SETTINGS
    def test_partition_preserves_order(self, first: Schema, second: Schema) -> None:
        common = transforms.extract(first, second)
        rest = transforms.exclude(first, second)

        assert set(common.fields()) == set(first.fields()) & set(second.fields())
        assert set(rest.fields()) == set(first.fields()) - set(second.fields())
        assert [name for name in first if name in common or name in rest] == list(first)

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_self_extract_is_identity(self, schema: Schema) -> None:
        assert transforms.extract(schema, schema) == schema
        assert len(transforms.exclude(schema, schema)) == 0


class TestFlagTransformLaws:
    """Partial / Required / Readonly."""

    @given(schema=schemas)
    @THOROUGH_SETTINGS
    def test_idempotent(self, schema: Schema) -> None:
        for transform in (transforms.partial, transforms.required, transforms.readonly):
            once = transform(schema)
            assert transform(once) == once

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_required_undoes_partial(self, schema: Schema) -> None:
        assert transforms.required(transforms.partial(schema)) == transforms.required(schema)

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_types_and_order_kept(self, schema: Schema) -> None:
        result = transforms.readonly(transforms.partial(schema))

        assert result.fields() == schema.fields()
        for name in schema:
            assert result.get(name).type_kind == schema.get(name).type_kind

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_input_not_mutated(self, schema: Schema) -> None:
        before = schema.to_dict()

        transforms.partial(schema)
        transforms.readonly(schema)
        transforms.mapped(schema, lambda _kind: NULL)

        assert schema.to_dict() == before


class TestNonNullableLaws:
    """NonNullable strips absent kinds."""

    @given(
        present=st.lists(primitive_kinds.filter(lambda k: k.kind not in ABSENT_KINDS), min_size=1, max_size=3, unique=True),
        optional=st.booleans(),
    )
    @STANDARD_SETTINGS
    def test_no_absent_kinds_remain(self, present: list[Primitive], optional: bool) -> None:
        spec = FieldSpec(UnionOf((*present, NULL, UNDEFINED_KIND)), optional=optional)

        result = transforms.non_nullable(spec)

        remaining = result.type_kind.alternatives if isinstance(result.type_kind, UnionOf) else (result.type_kind,)
        assert set(remaining) == set(present)
        assert result.optional is optional

    @given(type_kind=type_kinds)
    @STANDARD_SETTINGS
    def test_idempotent(self, type_kind: object) -> None:
        spec = FieldSpec(type_kind)  # type: ignore[arg-type]
        try:
            once = transforms.non_nullable(spec)
        except SchemaError:
            return

        assert transforms.non_nullable(once) == once


class TestRecordLaws:
    """Record(keys, value)."""

    @given(keys=st.lists(field_names, unique=True, max_size=6), value=type_kinds)
    @STANDARD_SETTINGS
    def test_exact_keys_uniform_spec(self, keys: list[str], value: object) -> None:
        result = transforms.record(keys, value)  # type: ignore[arg-type]

        assert result.fields() == tuple(keys)
        assert {result.get(k) for k in keys} <= {FieldSpec(value)}  # type: ignore[arg-type]


class TestMappedLaws:
    """Mapped over type kinds."""

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_identity(self, schema: Schema) -> None:
        assert transforms.mapped(schema, lambda kind: kind) == schema

    @given(schema=schemas)
    @STANDARD_SETTINGS
    def test_field_names_unchanged(self, schema: Schema) -> None:
        assert transforms.mapped(schema, lambda _kind: NULL).fields() == schema.fields()
