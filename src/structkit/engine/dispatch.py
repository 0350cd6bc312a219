# src/structkit/engine/dispatch.py
"""Type guard dispatch over heterogeneous values.

A dispatch table is an ordered tuple of GuardCases evaluated top to bottom;
the first case whose predicate holds has its handler invoked. Predicates
come in three kinds:

- IsKind: runtime primitive kind check (numeric vs textual, ...)
- HasTag: the value satisfies a variant's schema. This is a capability
  check, not nominal class identity: any value exposing the variant's
  required fields and operations qualifies.
- HasField: a named field exists on the value, whatever its type

When nothing matches, UnmatchedVariant is raised. That is an expected
outcome; add an ``otherwise`` case to turn it into a default.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from structkit.contracts.enums import PrimitiveKind, ValidationMode
from structkit.contracts.errors import UnmatchedVariant
from structkit.contracts.kinds import UNDEFINED, kind_of, lookup_field, shape_of
from structkit.contracts.results import Valid
from structkit.contracts.schema import Schema
from structkit.engine.validator import Validator

logger = structlog.get_logger(__name__)

R = TypeVar("R")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class IsKind:
    """Holds when the value's runtime primitive kind equals ``kind``."""

    kind: PrimitiveKind

    def __call__(self, value: Any) -> bool:
        return kind_of(value) is self.kind


@dataclass(frozen=True, slots=True)
class HasTag:
    """Holds when the value structurally satisfies ``variant``.

    Extra fields are allowed (lenient validation), so a Dog satisfies the
    Animal variant as long as it exposes ``live``.
    """

    variant: Schema
    validator: Validator | None = None

    def __call__(self, value: Any) -> bool:
        validator = self.validator or _tag_validator
        return isinstance(validator.validate(self.variant, value, ValidationMode.LENIENT), Valid)


@dataclass(frozen=True, slots=True)
class HasField:
    """Holds when ``name`` is a key of a mapping or an attribute of an object."""

    name: str

    def __call__(self, value: Any) -> bool:
        return lookup_field(value, self.name) is not UNDEFINED


@dataclass(frozen=True, slots=True)
class Always:
    """Matches every value; use as the last case for a default branch."""

    def __call__(self, value: Any) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class GuardCase(Generic[R]):
    """A predicate/handler pair in a dispatch table."""

    predicate: Predicate
    handler: Callable[[Any], R]


is_numeric = IsKind(PrimitiveKind.NUMBER)
is_textual = IsKind(PrimitiveKind.STRING)
is_boolean = IsKind(PrimitiveKind.BOOLEAN)

_tag_validator = Validator()


def when(predicate: Predicate, handler: Callable[[Any], R]) -> GuardCase[R]:
    """Build a GuardCase."""
    return GuardCase(predicate=predicate, handler=handler)


def otherwise(handler: Callable[[Any], R]) -> GuardCase[R]:
    """Default case that accepts any value."""
    return GuardCase(predicate=Always(), handler=handler)


def dispatch(value: Any, cases: Iterable[GuardCase[R]]) -> R:
    """Invoke the handler of the first case whose predicate holds.

    Args:
        value: Value to discriminate
        cases: Ordered dispatch table

    Returns:
        The winning handler's result

    Raises:
        UnmatchedVariant: If no predicate holds
    """
    for case in cases:
        if case.predicate(value):
            return case.handler(value)

    value_kind = kind_of(value)
    shape = shape_of(value)
    logger.debug("dispatch_unmatched", value_kind=str(value_kind), shape=list(shape))
    raise UnmatchedVariant(value_kind, shape)


class Dispatcher(Generic[R]):
    """Reusable, immutable dispatch table.

    Example:
        describe = Dispatcher([
            when(is_numeric, lambda x: f"The result is {x + x}"),
            when(HasField("x"), lambda v: f"The property {v['x']} exists"),
        ])
        describe(7)  # "The result is 14"
    """

    __slots__ = ("_cases",)

    def __init__(self, cases: Iterable[GuardCase[R]]) -> None:
        self._cases: tuple[GuardCase[R], ...] = tuple(cases)

    @classmethod
    def from_variants(cls, handlers: Mapping[Schema, Callable[[Any], R]]) -> Dispatcher[R]:
        """Build a table of HasTag cases, one per variant schema, in mapping order."""
        return cls(GuardCase(predicate=HasTag(variant), handler=handler) for variant, handler in handlers.items())

    @property
    def cases(self) -> tuple[GuardCase[R], ...]:
        return self._cases

    def with_default(self, handler: Callable[[Any], R]) -> Dispatcher[R]:
        """Return a new dispatcher with a trailing catch-all case."""
        return Dispatcher((*self._cases, otherwise(handler)))

    def dispatch(self, value: Any) -> R:
        """See module-level dispatch()."""
        return dispatch(value, self._cases)

    def __call__(self, value: Any) -> R:
        return self.dispatch(value)
