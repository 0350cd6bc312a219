"""Validation outcomes.

These types answer: "Did a value conform to a schema, and if not, why?"

IMPORTANT:
- ValidationResult is exactly Valid | Invalid, no warnings state
- Invalid always carries at least one Violation
- Violations are ordered: declared-field problems in schema order, then
  unexpected fields in the value's key order
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from structkit.contracts.enums import ViolationKind

FieldPath: TypeAlias = tuple[str | int, ...]


@dataclass(frozen=True, slots=True)
class Violation:
    """One detected mismatch between a value and a schema.

    Attributes:
        field_path: Field names from the root to the offending field;
            integers index into arrays
        kind: What went wrong
        detail: Free-form diagnostic (expected vs actual, etc.)
    """

    field_path: FieldPath
    kind: ViolationKind
    detail: str

    @property
    def path(self) -> str:
        """Dotted path such as ``owner.pets[2].name``; ``<root>`` for the value itself."""
        rendered = ""
        for part in self.field_path:
            if isinstance(part, int):
                rendered += f"[{part}]"
            else:
                rendered += f".{part}" if rendered else part
        return rendered or "<root>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for presentation layers."""
        return {"path": self.path, "kind": str(self.kind), "detail": self.detail}


@dataclass(frozen=True, slots=True)
class Valid:
    """The value conforms; ``value`` is returned unchanged."""

    value: Any

    @property
    def ok(self) -> bool:
        return True

    @property
    def violations(self) -> tuple[Violation, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class Invalid:
    """The value does not conform.

    Raises:
        ValueError: If constructed without violations
    """

    violations: tuple[Violation, ...]

    def __post_init__(self) -> None:
        if not self.violations:
            raise ValueError("Invalid requires at least one violation")

    @property
    def ok(self) -> bool:
        return False

    def kinds(self) -> tuple[ViolationKind, ...]:
        """Violation kinds in report order."""
        return tuple(v.kind for v in self.violations)


ValidationResult: TypeAlias = Valid | Invalid
