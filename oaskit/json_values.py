"""JSON encoding and decoding of MAC addresses, unix timestamps and URIs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from urllib.parse import SplitResult, urlunsplit

from oaskit.json_numbers import (
    DecodeError,
    JSONInput,
    _read_int,
    _read_str,
    decode_string_int64,
    encode_string_int64,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_HEX = re.compile(r"[0-9A-Fa-f]+")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


# MAC addresses.


def _parse_mac(text: str) -> bytes:
    error = DecodeError(f"invalid MAC address {text!r}")
    if len(text) < 14:
        raise error
    if text[2] in ":-":
        separator, width = text[2], 2
    elif text[4] == ".":
        separator, width = ".", 4
    else:
        raise error
    parts = text.split(separator)
    if any(len(part) != width or not _HEX.fullmatch(part) for part in parts):
        raise error
    octets = bytes.fromhex("".join(parts))
    if len(octets) not in (6, 8, 20):
        raise error
    return octets


def decode_mac(data: JSONInput) -> bytes:
    """Decode a hardware address from a JSON string."""
    return _parse_mac(_read_str(data))


def encode_mac(v: bytes) -> str:
    """Encode a hardware address as a JSON string."""
    return _quote(":".join(f"{octet:02x}" for octet in v))


# Unix timestamps.


def _from_micros(micros: int) -> datetime:
    try:
        return _EPOCH + timedelta(microseconds=micros)
    except OverflowError as exc:
        raise DecodeError(f"timestamp {micros}us out of range") from exc


def _to_micros(v: datetime) -> int:
    if v.tzinfo is None:
        v = v.astimezone()
    return (v - _EPOCH) // timedelta(microseconds=1)


def _seconds(v: datetime) -> int:
    return _to_micros(v) // 1_000_000


def _milli(v: datetime) -> int:
    return _to_micros(v) // 1_000


def _nano(v: datetime) -> int:
    return _to_micros(v) * 1_000


def decode_unix_seconds(data: JSONInput) -> datetime:
    """Decode unix seconds from a JSON number."""
    return _from_micros(_read_int(data) * 1_000_000)


def encode_unix_seconds(v: datetime) -> str:
    """Encode a time as unix seconds in a JSON number."""
    return str(_seconds(v))


def decode_unix_nano(data: JSONInput) -> datetime:
    """Decode unix nanoseconds from a JSON number, truncated to microseconds."""
    return _from_micros(_read_int(data) // 1_000)


def encode_unix_nano(v: datetime) -> str:
    """Encode a time as unix nanoseconds in a JSON number."""
    return str(_nano(v))


def decode_unix_micro(data: JSONInput) -> datetime:
    """Decode unix microseconds from a JSON number."""
    return _from_micros(_read_int(data))


def encode_unix_micro(v: datetime) -> str:
    """Encode a time as unix microseconds in a JSON number."""
    return str(_to_micros(v))


def decode_unix_milli(data: JSONInput) -> datetime:
    """Decode unix milliseconds from a JSON number."""
    return _from_micros(_read_int(data) * 1_000)


def encode_unix_milli(v: datetime) -> str:
    """Encode a time as unix milliseconds in a JSON number."""
    return str(_milli(v))


def decode_string_unix_seconds(data: JSONInput) -> datetime:
    """Decode unix seconds from a JSON string."""
    return _from_micros(decode_string_int64(data) * 1_000_000)


def encode_string_unix_seconds(v: datetime) -> str:
    """Encode a time as unix seconds in a JSON string."""
    return encode_string_int64(_seconds(v))


def decode_string_unix_nano(data: JSONInput) -> datetime:
    """Decode unix nanoseconds from a JSON string, truncated to microseconds."""
    return _from_micros(decode_string_int64(data) // 1_000)


def encode_string_unix_nano(v: datetime) -> str:
    """Encode a time as unix nanoseconds in a JSON string."""
    return encode_string_int64(_nano(v))


def decode_string_unix_micro(data: JSONInput) -> datetime:
    """Decode unix microseconds from a JSON string."""
    return _from_micros(decode_string_int64(data))


def encode_string_unix_micro(v: datetime) -> str:
    """Encode a time as unix microseconds in a JSON string."""
    return encode_string_int64(_to_micros(v))


def decode_string_unix_milli(data: JSONInput) -> datetime:
    """Decode unix milliseconds from a JSON string."""
    return _from_micros(decode_string_int64(data) * 1_000)


def encode_string_unix_milli(v: datetime) -> str:
    """Encode a time as unix milliseconds in a JSON string."""
    return encode_string_int64(_milli(v))


# URIs.


def _split_scheme(text: str) -> tuple[str, str]:
    for i, char in enumerate(text):
        if char.isascii() and char.isalpha():
            continue
        if char.isascii() and (char.isdigit() or char in "+-."):
            if i == 0:
                return "", text
            continue
        if char == ":":
            if i == 0:
                raise DecodeError("missing protocol scheme")
            return text[:i], text[i + 1 :]
        return "", text
    return "", text


def _check_authority(authority: str) -> None:
    host = authority.rpartition("@")[2]
    if host.startswith("["):
        end = host.find("]")
        if end < 0:
            raise DecodeError("missing ']' in host")
        port_part = host[end + 1 :]
        if port_part and not port_part.startswith(":"):
            raise DecodeError(f"invalid port {port_part!r} after host")
        port = port_part[1:]
    else:
        port = host.rpartition(":")[2] if ":" in host else ""
    if port and not port.isdigit():
        raise DecodeError(f"invalid port {':' + port!r} after host")


def _parse_request_uri(text: str) -> SplitResult:
    if any(ord(char) < 0x20 or char == "\x7f" for char in text):
        raise DecodeError("invalid control character in URL")
    if not text:
        raise DecodeError("empty url")
    scheme, rest = _split_scheme(text)
    scheme = scheme.lower()
    rest, _, query = rest.partition("?")
    if not rest.startswith("/"):
        if scheme:
            return SplitResult(scheme, "", rest, query, "")
        raise DecodeError("invalid URI for request")
    netloc = ""
    path = rest
    if scheme and rest.startswith("//"):
        authority, slash, tail = rest[2:].partition("/")
        netloc, path = authority, slash + tail
        _check_authority(netloc)
    for part in (netloc, path):
        if _BAD_PERCENT.search(part):
            raise DecodeError(f"invalid URL escape in {part!r}")
    return SplitResult(scheme, netloc, path, query, "")


def decode_uri(data: JSONInput) -> SplitResult:
    """Decode a request URI (absolute URI or absolute path) from a JSON string."""
    return _parse_request_uri(_read_str(data))


def encode_uri(v: SplitResult) -> str:
    """Encode a URI as a JSON string."""
    return _quote(urlunsplit(v))