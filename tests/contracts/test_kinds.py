"""Tests for runtime kind inspection."""

from __future__ import annotations

import pickle

import pytest

from structkit.contracts import UNDEFINED, PrimitiveKind, is_record_like, kind_of, lookup_field, shape_of


class _Foo:
    def bar(self) -> str:
        return "Hello World"


class _Bar:
    def __init__(self) -> None:
        self.baz = "123"


class TestKindOf:
    """kind_of classifies values like a typeof check."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("text", PrimitiveKind.STRING),
            (7, PrimitiveKind.NUMBER),
            (2.5, PrimitiveKind.NUMBER),
            (True, PrimitiveKind.BOOLEAN),
            (None, PrimitiveKind.NULL),
            (UNDEFINED, PrimitiveKind.UNDEFINED),
            ({"x": 1}, PrimitiveKind.OBJECT),
            ([1, 2], PrimitiveKind.ARRAY),
            ((1, 2), PrimitiveKind.ARRAY),
            (len, PrimitiveKind.FUNCTION),
            (_Foo(), PrimitiveKind.OBJECT),
        ],
    )
    def test_kind_of(self, value: object, expected: PrimitiveKind) -> None:
        assert kind_of(value) is expected

    def test_bool_is_not_number(self) -> None:
        assert kind_of(False) is PrimitiveKind.BOOLEAN


class TestUndefined:
    """UNDEFINED is a falsy singleton."""

    def test_singleton(self) -> None:
        assert type(UNDEFINED)() is UNDEFINED

    def test_falsy(self) -> None:
        assert not UNDEFINED

    def test_survives_pickle(self) -> None:
        assert pickle.loads(pickle.dumps(UNDEFINED)) is UNDEFINED


class TestLookupAndShape:
    """Field access works for mappings and objects alike."""

    def test_lookup_mapping(self) -> None:
        assert lookup_field({"x": 7}, "x") == 7
        assert lookup_field({"x": 7}, "y") is UNDEFINED

    def test_lookup_object_attribute(self) -> None:
        assert lookup_field(_Bar(), "baz") == "123"
        assert callable(lookup_field(_Foo(), "bar"))
        assert lookup_field(_Bar(), "bar") is UNDEFINED

    def test_lookup_on_primitive_is_undefined(self) -> None:
        assert lookup_field("text", "upper") is UNDEFINED

    def test_shape_of_mapping_keeps_order(self) -> None:
        assert shape_of({"b": 1, "a": 2}) == ("b", "a")

    def test_shape_of_object_lists_public_attributes(self) -> None:
        assert shape_of(_Bar()) == ("baz",)

    def test_shape_of_primitive_is_empty(self) -> None:
        assert shape_of(True) == ()

    def test_lookup_on_bytes_is_undefined(self) -> None:
        assert lookup_field(b"x", "decode") is UNDEFINED

    def test_shape_of_set_is_empty(self) -> None:
        assert shape_of({"a", "b"}) == ()


class TestIsRecordLike:
    """Only mappings and plain instances can satisfy a record."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ({"x": 1}, True),
            (_Bar(), True),
            (b"abc", False),
            (bytearray(b"abc"), False),
            ({"x"}, False),
            (frozenset({"x"}), False),
            (range(2), False),
            (1j, False),
            ([1], False),
            ("text", False),
            (None, False),
        ],
    )
    def test_is_record_like(self, value: object, expected: bool) -> None:
        assert is_record_like(value) is expected

    def test_opaque_values_still_classify_as_object(self) -> None:
        assert kind_of(b"abc") is PrimitiveKind.OBJECT
