"""Runtime kind inspection for arbitrary Python values.

Uses isinstance() checks, never string matching on type names.
``bool`` is tested before numbers because it subclasses ``int``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from structkit.contracts.enums import PrimitiveKind


class _Undefined:
    """Singleton marker for an explicitly undefined value.

    Python has no native ``undefined``; ``None`` maps to ``null``.
    """

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()


def kind_of(value: Any) -> PrimitiveKind:
    """Classify a value by runtime primitive kind.

    Args:
        value: Any Python value

    Returns:
        The PrimitiveKind the value belongs to (never ANY)
    """
    if value is UNDEFINED:
        return PrimitiveKind.UNDEFINED
    if value is None:
        return PrimitiveKind.NULL
    if isinstance(value, bool):
        return PrimitiveKind.BOOLEAN
    if isinstance(value, (int, float)):
        return PrimitiveKind.NUMBER
    if isinstance(value, str):
        return PrimitiveKind.STRING
    if isinstance(value, Mapping):
        return PrimitiveKind.OBJECT
    if isinstance(value, (list, tuple)):
        return PrimitiveKind.ARRAY
    if callable(value):
        return PrimitiveKind.FUNCTION
    return PrimitiveKind.OBJECT


# Builtin values that classify as object but carry no named fields
_OPAQUE_TYPES: Final = (bytes, bytearray, memoryview, set, frozenset, complex, range)


def is_record_like(value: Any) -> bool:
    """True for mappings and plain instances, the values a record can describe.

    Opaque builtins such as bytes or sets are objects to kind_of() but expose
    no fields, so they never satisfy a record.
    """
    if isinstance(value, Mapping):
        return True
    return kind_of(value) is PrimitiveKind.OBJECT and not isinstance(value, _OPAQUE_TYPES)


def shape_of(value: Any) -> tuple[str, ...]:
    """Field names a value exposes, for diagnostics.

    Mappings report their keys in insertion order; other objects report
    public attribute names. Primitives and sequences have no shape.
    """
    if isinstance(value, Mapping):
        return tuple(str(k) for k in value)
    if is_record_like(value):
        return tuple(name for name in dir(value) if not name.startswith("_"))
    return ()


def lookup_field(value: Any, name: str) -> Any:
    """Read a field from a mapping key or an object attribute.

    Returns:
        The field value, or UNDEFINED when the field is absent
    """
    if isinstance(value, Mapping):
        return value.get(name, UNDEFINED)
    if not is_record_like(value):
        return UNDEFINED
    return getattr(value, name, UNDEFINED)
