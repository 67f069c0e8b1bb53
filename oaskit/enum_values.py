"""Parsing of enum values and nullable-enum handling."""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Sequence, Union

from oaskit.schema import Schema

RawJSON = Union[str, bytes, bytearray]

_WHITESPACE = " \t\n\r"
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class EnumValueError(ValueError):
    """Raised when an enum value cannot be parsed."""


def _text(raw: RawJSON) -> str:
    if isinstance(raw, (bytes, bytearray)):
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EnumValueError(str(exc)) from exc
    return raw


def _quote(raw: RawJSON) -> str:
    return json.dumps(_text(raw), ensure_ascii=False)


def _parse_int(text: str) -> int:
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise EnumValueError(f"value {text} overflows int64")
    return value


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise EnumValueError(f"value {text} out of range")
    return value


def _reject_constant(name: str) -> Any:
    raise EnumValueError(f"invalid literal {name!r}")


_DECODER = json.JSONDecoder(
    parse_int=_parse_int, parse_float=_parse_float, parse_constant=_reject_constant
)


def infer_json_type(raw: RawJSON) -> str:
    """Type name of a JSON scalar judged by its first character."""
    first = _text(raw).lstrip(_WHITESPACE)[:1]
    if first == '"':
        return "string"
    if first == "-" or (first.isascii() and first.isdigit()):
        return "number"
    if first in ("t", "f"):
        return "bool"
    if first == "n":
        raise EnumValueError(f"cannot infer type from {_quote(raw)}")
    raise EnumValueError(f"invalid value {_quote(raw)}")


def parse_json_value(schema: Optional[Schema], raw: RawJSON) -> Any:
    """Parse the first JSON value of ``raw``; trailing data is ignored.

    Integers must fit in int64; other numbers become floats.
    """
    text = _text(raw).lstrip(_WHITESPACE)
    if not text:
        raise EnumValueError("unexpected type: unexpected end of input")
    try:
        value, _ = _DECODER.raw_decode(text)
    except json.JSONDecodeError as exc:
        raise EnumValueError(str(exc)) from exc
    return value


def parse_enum_values(schema: Optional[Schema], raw_values: Sequence[RawJSON]) -> list[Any]:
    """Parse every raw enum value of ``schema``."""
    values = []
    for raw in raw_values:
        try:
            values.append(parse_json_value(schema, raw))
        except EnumValueError as exc:
            raise EnumValueError(f"parse value {_quote(raw)}: {exc}") from exc
    return values


def handle_nullable_enum(schema: Schema) -> None:
    """Mark the schema nullable if its enum lists null, then drop the nulls."""
    schema.nullable = schema.nullable or any(v is None for v in schema.enum)
    if schema.nullable:
        schema.enum = [v for v in schema.enum if v is not None]