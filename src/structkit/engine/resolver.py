# src/structkit/engine/resolver.py
"""Conditional type resolution over structural subtyping.

``subject extends bound ? on_true : on_false`` is decided once per query,
not per value. The subtype relation is memoized per (subject, bound) pair;
schemas are immutable, so a cached answer never goes stale.

Structural subtype rules (subject <: bound) - for every field of bound:
1. subject declares a field of the same name
2. its type kind is compatible (see _kind_compatible)
3. it is not optional where bound requires the field
4. it is not readonly where bound allows writes

Recursive schemas (via SchemaRef) are handled coinductively: a pair already
under comparison is assumed to hold.

Thread Safety:
    The memo table is guarded by a lock. Writes are idempotent, so two
    threads racing to compute the same pair store equal values.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass

import structlog

from structkit.contracts.enums import PrimitiveKind
from structkit.contracts.kinds import kind_of
from structkit.contracts.schema import (
    ArrayOf,
    FieldSpec,
    LiteralOf,
    Primitive,
    RecordOf,
    Schema,
    TypeKind,
    UnionOf,
)
from structkit.core.config import DEFAULT_SETTINGS, ToolkitSettings

logger = structlog.get_logger(__name__)

_Seen = set[tuple[int, int]]


@dataclass(frozen=True, slots=True)
class ConditionalQuery:
    """``subject extends bound ? on_true : on_false``."""

    subject: Schema
    bound: Schema
    on_true: Schema
    on_false: Schema


def _literal_within_primitive(literal: LiteralOf, primitive: PrimitiveKind) -> bool:
    return all(kind_of(value) is primitive for value in literal.values)


def _kind_compatible(sub: TypeKind, bound: TypeKind, seen: _Seen) -> bool:
    """Whether a field of type ``sub`` can stand in for one of type ``bound``."""
    if isinstance(bound, Primitive) and bound.kind is PrimitiveKind.ANY:
        return True

    if isinstance(bound, UnionOf):
        if isinstance(sub, UnionOf):
            # Subject's alternatives must cover every alternative of bound
            return all(
                any(_kind_compatible(s_alt, b_alt, seen) for s_alt in sub.alternatives)
                for b_alt in bound.alternatives
            )
        return any(_kind_compatible(sub, b_alt, seen) for b_alt in bound.alternatives)

    if isinstance(sub, Primitive) and isinstance(bound, Primitive):
        return sub.kind is bound.kind

    if isinstance(sub, RecordOf) and isinstance(bound, RecordOf):
        return _is_subtype(sub.target, bound.target, seen)

    if isinstance(sub, ArrayOf) and isinstance(bound, ArrayOf):
        return _kind_compatible(sub.element, bound.element, seen)

    if isinstance(sub, LiteralOf):
        if isinstance(bound, LiteralOf):
            return sub.issubset(bound)
        if isinstance(bound, Primitive):
            return _literal_within_primitive(sub, bound.kind)

    return False


def _is_subtype(subject: Schema, bound: Schema, seen: _Seen) -> bool:
    if subject is bound:
        return True
    pair = (id(subject), id(bound))
    if pair in seen:
        return True
    seen.add(pair)

    holds = all(
        name in subject and _field_compatible(subject.get(name), bound_spec, seen)
        for name, bound_spec in bound.items()
    )
    if not holds:
        # The assumption failed; later comparisons must not rely on it
        seen.discard(pair)
    return holds


def _field_compatible(sub_spec: FieldSpec, bound_spec: FieldSpec, seen: _Seen) -> bool:
    if sub_spec.optional and not bound_spec.optional:
        return False
    if sub_spec.readonly and not bound_spec.readonly:
        return False
    return _kind_compatible(sub_spec.type_kind, bound_spec.type_kind, seen)


def is_structural_subtype(subject: Schema, bound: Schema) -> bool:
    """True iff ``subject`` satisfies every field constraint of ``bound``.

    Names and identity of the schemas play no part; only shape does.

    Raises:
        SchemaError: If either schema reaches an unbound SchemaRef
    """
    return _is_subtype(subject, bound, set())


class ConditionalResolver:
    """Resolves ConditionalQuery instances, memoizing the subtype relation.

    Cache entries hold references to both schemas so an id() can never be
    reused by a different object while its entry is alive. The table holds
    at most ``settings.resolver_cache_size`` pairs; the least recently used
    pair is evicted first, which releases its schemas.
    """

    def __init__(self, settings: ToolkitSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._cache: OrderedDict[tuple[int, int], tuple[Schema, Schema, bool]] = OrderedDict()
        self._max_entries = self._settings.resolver_cache_size
        self._lock = threading.Lock()

    def extends(self, subject: Schema, bound: Schema) -> bool:
        """Memoized is_structural_subtype()."""
        if not self._settings.resolver_cache:
            return is_structural_subtype(subject, bound)

        key = (id(subject), id(bound))
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None and entry[0] is subject and entry[1] is bound:
                self._cache.move_to_end(key)
            else:
                entry = None
        if entry is not None:
            logger.debug("subtype_cache_hit", subject=subject.label, bound=bound.label)
            return entry[2]

        # Computed outside the lock; concurrent writers store equal results
        result = is_structural_subtype(subject, bound)
        with self._lock:
            self._cache[key] = (subject, bound, result)
            self._cache.move_to_end(key)
            evicted = 0
            while len(self._cache) > self._max_entries:
                self._cache.popitem(last=False)
                evicted += 1
        if evicted:
            logger.debug("subtype_cache_evicted", max_entries=self._max_entries, evicted_count=evicted)
        logger.debug("subtype_resolved", subject=subject.label, bound=bound.label, result=result)
        return result

    def resolve(self, query: ConditionalQuery) -> Schema:
        """Return ``query.on_true`` if subject extends bound, else ``query.on_false``."""
        return query.on_true if self.extends(query.subject, query.bound) else query.on_false

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


_default_resolver = ConditionalResolver()


def resolve(query: ConditionalQuery) -> Schema:
    """Resolve with the shared default resolver."""
    return _default_resolver.resolve(query)
