"""JSON helpers: generic (un)marshalling and numbers carried inside JSON strings."""

from __future__ import annotations

import json
import math
import re
import struct
from decimal import Decimal
from typing import Any, NoReturn, Union

JSONInput = Union[str, bytes, bytearray]


class DecodeError(ValueError):
    """Raised when a JSON value cannot be decoded."""


_JSON_WHITESPACE = " \t\n\r"

_INT_BITS = {"int": 64, "int8": 8, "int16": 16, "int32": 32, "int64": 64}

_INT_TEXT = re.compile(r"-?(?:0|[1-9][0-9]*)")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_INFINITY = re.compile(r"[+-]?(?:inf|infinity)", re.IGNORECASE)
_NAN = re.compile(r"nan", re.IGNORECASE)

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _reject_constant(name: str) -> NoReturn:
    raise DecodeError(f"invalid literal {name!r}")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _load(data: JSONInput) -> Any:
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(str(exc)) from exc


def _read_str(data: JSONInput) -> str:
    """Read a JSON document that must hold a string."""
    value = _load(data)
    if not isinstance(value, str):
        raise DecodeError(f"expected string, got {_json_type(value)}")
    return value


def _check_int_range(value: int, bits: int) -> int:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise DecodeError(f"value {value} overflows int{bits}")
    return value


def _read_int(data: JSONInput, bits: int = 64) -> int:
    """Read a JSON document that must hold an integer number."""
    value = _load(data)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected integer, got {_json_type(value)}")
    return _check_int_range(value, bits)


def _parse_int_text(text: str, bits: int) -> int:
    stripped = text.strip(_JSON_WHITESPACE)
    if not _INT_TEXT.fullmatch(stripped):
        raise DecodeError(f"invalid integer {text!r}")
    return _check_int_range(int(stripped), bits)


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _parse_float(text: str, bits: int) -> float:
    if _NAN.fullmatch(text):
        return math.nan
    if _INFINITY.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    try:
        if _DECIMAL_FLOAT.fullmatch(text):
            value = float(text)
        elif _HEX_FLOAT.fullmatch(text):
            value = float.fromhex(text)
        else:
            raise DecodeError(f"invalid float {text!r}")
    except OverflowError as exc:
        raise DecodeError(f"value {text!r} out of range") from exc
    if math.isinf(value):
        raise DecodeError(f"value {text!r} out of range")
    if bits == 32:
        try:
            value = _to_float32(value)
        except OverflowError as exc:
            raise DecodeError(f"value {text!r} out of range") from exc
    return value


def _shortest_digits(value: float, bits: int) -> tuple[str, int]:
    """Shortest round-tripping decimal digits of a positive value and the
    position of the decimal point relative to them."""
    if bits == 32:
        text = ""
        for precision in range(9):
            text = f"{value:.{precision}e}"
            if _to_float32(float(text)) == value:
                break
    else:
        text = repr(value)
    _, digit_tuple, exponent = Decimal(text).as_tuple()
    digits = list(digit_tuple)
    while digits and digits[-1] == 0:
        digits.pop()
        exponent += 1
    return "".join(map(str, digits)), len(digits) + exponent


def _format_float(value: float, bits: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    digits, point = _shortest_digits(abs(value), bits)
    exponent = point - 1
    if exponent < -4 or exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exponent < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exponent):02d}"
    integer = digits[:point].ljust(point, "0") if point > 0 else "0"
    fraction_len = max(len(digits) - point, 0)
    fraction = "".join(
        digits[i] if 0 <= i < len(digits) else "0"
        for i in range(point, point + fraction_len)
    )
    return sign + integer + ("." + fraction if fraction else "")


def marshal(value: Any) -> bytes:
    """Encode a value to compact JSON bytes with sorted object keys."""
    text = json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False, sort_keys=True
    )
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return text.encode("utf-8")


def unmarshal(data: JSONInput) -> Any:
    """Decode a JSON document."""
    return _load(data)


def encode_string_float32(v: float) -> str:
    """Encode a float32 as a JSON string."""
    try:
        value = _to_float32(float(v))
    except OverflowError:
        value = math.copysign(math.inf, v)
    return f'"{_format_float(value, 32)}"'


def decode_string_float32(data: JSONInput) -> float:
    """Decode a float32 from a JSON string."""
    return _parse_float(_read_str(data), 32)


def encode_string_float64(v: float) -> str:
    """Encode a float64 as a JSON string."""
    return f'"{_format_float(float(v), 64)}"'


def decode_string_float64(data: JSONInput) -> float:
    """Decode a float64 from a JSON string."""
    return _parse_float(_read_str(data), 64)


def _encode_string_int(v: int, bits: int) -> str:
    value = int(v)
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise ValueError(f"value {value} overflows int{bits}")
    return f'"{value}"'


def encode_string_int(v: int) -> str:
    """Encode an int as a JSON string."""
    return _encode_string_int(v, _INT_BITS["int"])


def decode_string_int(data: JSONInput) -> int:
    """Decode an int from a JSON string."""
    return _parse_int_text(_read_str(data), _INT_BITS["int"])


def encode_string_int8(v: int) -> str:
    """Encode an int8 as a JSON string."""
    return _encode_string_int(v, 8)


def decode_string_int8(data: JSONInput) -> int:
    """Decode an int8 from a JSON string."""
    return _parse_int_text(_read_str(data), 8)


def encode_string_int16(v: int) -> str:
    """Encode an int16 as a JSON string."""
    return _encode_string_int(v, 16)


def decode_string_int16(data: JSONInput) -> int:
    """Decode an int16 from a JSON string."""
    return _parse_int_text(_read_str(data), 16)


def encode_string_int32(v: int) -> str:
    """Encode an int32 as a JSON string."""
    return _encode_string_int(v, 32)


def decode_string_int32(data: JSONInput) -> int:
    """Decode an int32 from a JSON string."""
    return _parse_int_text(_read_str(data), 32)


def encode_string_int64(v: int) -> str:
    """Encode an int64 as a JSON string."""
    return _encode_string_int(v, 64)


def decode_string_int64(data: JSONInput) -> int:
    """Decode an int64 from a JSON string."""
    return _parse_int_text(_read_str(data), 64)