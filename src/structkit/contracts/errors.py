"""Exceptions raised across the toolkit.

Two disjoint families:

- SchemaError: programming-time fault (bad transform arguments, malformed
  field specs, unbound references). Always surfaced to the caller.
- UnmatchedVariant: expected runtime outcome of dispatch when no guard
  matches. Callers are required to handle it.

Data-shape problems are never raised; the validator collects them as
Violation records instead (see results.py).
"""

from __future__ import annotations

from collections.abc import Iterable

from structkit.contracts.enums import PrimitiveKind, SchemaErrorReason


class SchemaError(Exception):
    """Raised when a schema cannot be built, transformed, or dereferenced.

    Attributes:
        reason: Machine-readable failure category
        keys: Field names involved in the failure (may be empty)
        message: Human-readable error description
    """

    def __init__(self, reason: SchemaErrorReason, message: str, *, keys: Iterable[str] = ()) -> None:
        self.reason = reason
        self.keys = tuple(keys)
        self.message = message
        super().__init__(f"[{reason}] {message}")


class UnmatchedVariant(Exception):
    """Raised by dispatch when no guard case accepts the value.

    This is NOT a programming fault. It mirrors an explicit "unsupported
    type" rejection and callers decide whether to recover (default case)
    or translate it into a domain error.

    Attributes:
        value_kind: Runtime primitive kind of the rejected value
        shape: Field names the value exposes (empty for non-records)
    """

    def __init__(self, value_kind: PrimitiveKind, shape: tuple[str, ...] = ()) -> None:
        self.value_kind = value_kind
        self.shape = shape
        if shape:
            detail = f"{value_kind} with fields {{{', '.join(shape)}}}"
        else:
            detail = str(value_kind)
        super().__init__(f"No guard case matched value of kind {detail}")
