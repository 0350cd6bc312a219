"""Field notation: declare schemas with annotation-style strings.

Schemas can be written as a list of field specs instead of nested
constructor calls:

    schema_from_notation(
        [
            "readonly id: number",
            "name?: string",
            "tags: string[]",
            "status: 'draft' | 'published'",
            "owner: Person | null",
        ],
        registry={"Person": person_schema},
    )

Grammar (informal):
    field   := ["readonly "] name ["?"] ":" type ["?"]
    type    := alt ("|" alt)*
    alt     := (primitive | literal | registry-name | "(" type ")") ("[]")*

Python spellings (str, int, float, bool) are accepted as aliases of the
corresponding primitive kinds.

Note: Field specs must be quoted strings in YAML. Unquoted ``- id: number``
is parsed as a dict ``{id: number}``; both forms are accepted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from structkit.contracts.enums import PrimitiveKind, SchemaErrorReason
from structkit.contracts.errors import SchemaError
from structkit.contracts.schema import (
    ArrayOf,
    FieldSpec,
    LiteralOf,
    Primitive,
    RecordOf,
    Schema,
    SchemaRef,
    TypeKind,
    UnionOf,
)

# "readonly name?: type" - name must be a valid identifier
FIELD_PATTERN = re.compile(r"^(readonly\s+)?(\w+)(\?)?\s*:\s*(.+?)$")

_NUMBER_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")

PRIMITIVE_NAMES: dict[str, PrimitiveKind] = {
    **{kind.value: kind for kind in PrimitiveKind},
    "str": PrimitiveKind.STRING,
    "int": PrimitiveKind.NUMBER,
    "float": PrimitiveKind.NUMBER,
    "bool": PrimitiveKind.BOOLEAN,
}


def _malformed(message: str, spec: str) -> SchemaError:
    return SchemaError(SchemaErrorReason.MALFORMED_FIELD, f"{message} in field spec '{spec}'")


def _split_top_level(text: str, spec: str) -> list[str]:
    """Split on '|' outside quotes and parentheses."""
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    current = ""
    for ch in text:
        if quote:
            current += ch
            if ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise _malformed("Unbalanced ')'", spec)
        elif ch == "|" and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += ch
    if quote or depth:
        raise _malformed("Unterminated quote or parenthesis", spec)
    parts.append(current.strip())
    if any(not p for p in parts):
        raise _malformed("Empty union alternative", spec)
    return parts


def _parse_literal(token: str) -> Any:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        return token[1:-1]
    if token == "true":
        return True
    if token == "false":
        return False
    if _NUMBER_PATTERN.match(token):
        return float(token) if "." in token else int(token)
    raise ValueError(token)


def parse_type(text: str, *, registry: Mapping[str, Schema | SchemaRef] | None = None, spec: str | None = None) -> TypeKind:
    """Parse a type expression such as ``string | number[]``.

    Consecutive literal alternatives are merged into a single LiteralOf.

    Raises:
        SchemaError: MALFORMED_FIELD on syntax errors or unknown type names
    """
    spec = spec if spec is not None else text
    registry = registry or {}
    alternatives: list[TypeKind] = []
    literals: list[Any] = []

    for part in _split_top_level(text.strip(), spec):
        array_depth = 0
        while part.endswith("[]"):
            part = part[:-2].rstrip()
            array_depth += 1

        kind: TypeKind
        if part.startswith("(") and part.endswith(")"):
            kind = parse_type(part[1:-1], registry=registry, spec=spec)
        elif part in PRIMITIVE_NAMES:
            kind = Primitive(PRIMITIVE_NAMES[part])
        elif part in registry:
            kind = RecordOf(registry[part])
        else:
            try:
                value = _parse_literal(part)
            except ValueError:
                raise _malformed(f"Unknown type '{part}'", spec) from None
            if array_depth == 0:
                literals.append(value)
                continue
            kind = LiteralOf((value,))

        for _ in range(array_depth):
            kind = ArrayOf(kind)
        alternatives.append(kind)

    if literals:
        alternatives.append(LiteralOf(tuple(literals)))
    if len(alternatives) == 1:
        return alternatives[0]
    return UnionOf(tuple(alternatives))


def parse_field(spec: str, *, registry: Mapping[str, Schema | SchemaRef] | None = None) -> tuple[str, FieldSpec]:
    """Parse a field specification string.

    Args:
        spec: Field spec like "name: string", "score?: number" or
            "readonly id: number"
        registry: Named schemas that may be referenced as types

    Returns:
        (field name, FieldSpec) pair

    Raises:
        SchemaError: If spec is malformed or a type is unknown
    """
    spec = spec.strip()
    match = FIELD_PATTERN.match(spec)
    if not match:
        raise _malformed("Expected format 'name: type' or 'name?: type'", spec)

    readonly_marker, name, optional_marker, type_text = match.groups()

    # Regex allows numeric-prefixed names like "123field"
    if not name.isidentifier():
        raise SchemaError(
            SchemaErrorReason.MALFORMED_FIELD,
            f"Invalid field name '{name}' in field spec '{spec}'. Field names must be valid identifiers.",
            keys=(name,),
        )

    # Trailing "?" on the type is accepted as an optional marker too
    type_text = type_text.strip()
    if type_text.endswith("?"):
        type_text = type_text[:-1].rstrip()
        optional_marker = "?"

    return name, FieldSpec(
        type_kind=parse_type(type_text, registry=registry, spec=spec),
        optional=optional_marker is not None,
        readonly=readonly_marker is not None,
    )


def _normalize_field_spec(spec: Any, *, index: int) -> str:
    """Accept "name: type" strings or single-key dicts from YAML."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, Mapping):
        if len(spec) != 1:
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"Field spec at index {index} is a dict with {len(spec)} keys. "
                f"Expected single-key dict like {{'field_name': 'type'}}.",
            )
        name, type_spec = next(iter(spec.items()))
        if not isinstance(name, str) or not isinstance(type_spec, str):
            raise SchemaError(
                SchemaErrorReason.MALFORMED_FIELD,
                f"Field spec at index {index}: dict keys and values must be strings, "
                f"got {{{type(name).__name__}: {type(type_spec).__name__}}}.",
            )
        return f"{name}: {type_spec}"
    raise SchemaError(
        SchemaErrorReason.MALFORMED_FIELD,
        f"Field spec at index {index} must be a string or single-key dict, got {type(spec).__name__}.",
    )


def schema_from_notation(
    specs: Iterable[str | Mapping[str, str]],
    *,
    name: str | None = None,
    registry: Mapping[str, Schema | SchemaRef] | None = None,
) -> Schema:
    """Build a Schema from a list of field spec strings.

    Raises:
        SchemaError: If any spec is malformed or names are duplicated
    """
    pairs = [parse_field(_normalize_field_spec(s, index=i), registry=registry) for i, s in enumerate(specs)]
    return Schema.build(pairs, name=name)
