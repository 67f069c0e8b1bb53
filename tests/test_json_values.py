from datetime import datetime, timedelta, timezone

import pytest

from oaskit.json_numbers import DecodeError
from oaskit.json_values import (
    decode_mac,
    decode_string_unix_micro,
    decode_string_unix_milli,
    decode_string_unix_nano,
    decode_string_unix_seconds,
    decode_unix_micro,
    decode_unix_milli,
    decode_unix_nano,
    decode_unix_seconds,
    decode_uri,
    encode_mac,
    encode_string_unix_micro,
    encode_string_unix_milli,
    encode_string_unix_nano,
    encode_string_unix_seconds,
    encode_unix_micro,
    encode_unix_milli,
    encode_unix_nano,
    encode_unix_seconds,
    encode_uri,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
VALUES = [0, 1, 10, 10000]


@pytest.mark.parametrize(
    "data,want",
    [
        ('"02:00:00:00:00:01"', bytes([2, 0, 0, 0, 0, 1])),
        ('"0A-0B-0C-0D-0E-0F"', bytes([10, 11, 12, 13, 14, 15])),
        ('"0200.0000.0001"', bytes([2, 0, 0, 0, 0, 1])),
        ('"02:00:00:00:00:00:00:01"', bytes([2, 0, 0, 0, 0, 0, 0, 1])),
    ],
)
def test_mac_valid(data, want):
    got = decode_mac(data)
    assert got == want
    assert decode_mac(encode_mac(want)) == want


@pytest.mark.parametrize(
    "data",
    [
        "02:00:00:00:00:GH",
        '"02-00-00-00-00"',
        '"020000000001"',
        '"02:00-00:00:00:01"',
    ],
)
def test_mac_invalid(data):
    with pytest.raises(DecodeError):
        decode_mac(data)


def test_encode_mac_format():
    assert encode_mac(bytes([10, 11, 12, 13, 14, 15])) == '"0a:0b:0c:0d:0e:0f"'


@pytest.mark.parametrize("value", VALUES)
def test_unix_seconds_round_trip(value):
    want = EPOCH + timedelta(seconds=value)
    assert decode_unix_seconds(str(value)) == want
    assert encode_unix_seconds(want) == str(value)
    assert decode_unix_seconds(encode_unix_seconds(want)) == want


@pytest.mark.parametrize("value", VALUES)
def test_unix_milli_round_trip(value):
    want = EPOCH + timedelta(milliseconds=value)
    assert decode_unix_milli(str(value)) == want
    assert encode_unix_milli(want) == str(value)
    assert decode_unix_milli(encode_unix_milli(want)) == want


@pytest.mark.parametrize("value", VALUES)
def test_unix_micro_round_trip(value):
    want = EPOCH + timedelta(microseconds=value)
    assert decode_unix_micro(str(value)) == want
    assert encode_unix_micro(want) == str(value)
    assert decode_unix_micro(encode_unix_micro(want)) == want


@pytest.mark.parametrize("data", ['"1"', "true", "1.5"])
def test_unix_errors(data):
    with pytest.raises(DecodeError):
        decode_unix_seconds(data)
    with pytest.raises(DecodeError):
        decode_unix_milli(data)
    with pytest.raises(DecodeError):
        decode_unix_micro(data)


def test_unix_nano_values():
    assert decode_unix_nano("10000") == EPOCH + timedelta(microseconds=10)
    assert decode_unix_nano("0") == EPOCH
    assert encode_unix_nano(EPOCH + timedelta(microseconds=10)) == "10000"
    with pytest.raises(DecodeError):
        decode_unix_nano('"1"')


def test_decode_unix_nano_date():
    got = decode_unix_nano("1586960586000000000")
    assert got == datetime(2020, 4, 15, 14, 23, 6, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", VALUES)
def test_string_unix_seconds_round_trip(value):
    want = EPOCH + timedelta(seconds=value)
    assert decode_string_unix_seconds(f'"{value}"') == want
    assert encode_string_unix_seconds(want) == f'"{value}"'
    assert decode_string_unix_seconds(encode_string_unix_seconds(want)) == want


@pytest.mark.parametrize("value", VALUES)
def test_string_unix_milli_round_trip(value):
    want = EPOCH + timedelta(milliseconds=value)
    assert decode_string_unix_milli(f'"{value}"') == want
    assert encode_string_unix_milli(want) == f'"{value}"'
    assert decode_string_unix_milli(encode_string_unix_milli(want)) == want


@pytest.mark.parametrize("value", VALUES)
def test_string_unix_micro_round_trip(value):
    want = EPOCH + timedelta(microseconds=value)
    assert decode_string_unix_micro(f'"{value}"') == want
    assert encode_string_unix_micro(want) == f'"{value}"'
    assert decode_string_unix_micro(encode_string_unix_micro(want)) == want


@pytest.mark.parametrize("data", ["1", '"foo"'])
def test_string_unix_errors(data):
    with pytest.raises(DecodeError):
        decode_string_unix_seconds(data)
    with pytest.raises(DecodeError):
        decode_string_unix_milli(data)
    with pytest.raises(DecodeError):
        decode_string_unix_micro(data)
    with pytest.raises(DecodeError):
        decode_string_unix_nano(data)


def test_decode_string_unix_nano_date():
    got = decode_string_unix_nano('"1586960586000000000"')
    assert got == datetime(2020, 4, 15, 14, 23, 6, tzinfo=timezone.utc)
    assert encode_string_unix_nano(got) == '"1586960586000000000"'


def test_unix_with_offset_timezone():
    moment = datetime(1970, 1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    assert encode_unix_seconds(moment) == "0"


def test_unix_before_epoch_floors():
    moment = EPOCH - timedelta(microseconds=1500)
    assert encode_unix_milli(moment) == "-2"
    assert encode_unix_seconds(moment) == "-1"


def test_decode_uri_absolute():
    got = decode_uri('"HTTPS://example.com:8080/a/b?x=1"')
    assert got.scheme == "https"
    assert got.netloc == "example.com:8080"
    assert got.path == "/a/b"
    assert got.query == "x=1"
    assert decode_uri(encode_uri(got)) == got


def test_decode_uri_path_keeps_fragment():
    got = decode_uri('"/path#frag"')
    assert got.scheme == ""
    assert got.path == "/path#frag"


def test_decode_uri_opaque():
    got = decode_uri('"mailto:user@example.com"')
    assert got.scheme == "mailto"
    assert got.path == "user@example.com"
    assert encode_uri(got) == '"mailto:user@example.com"'


def test_decode_uri_double_slash_without_scheme_is_path():
    got = decode_uri('"//example.com/x"')
    assert got.netloc == ""
    assert got.path == "//example.com/x"


@pytest.mark.parametrize(
    "data",
    [
        '""',
        '"foo"',
        '":foo"',
        '"http://example.com/%zz"',
        '"http://example.com:abc/"',
        '"/a\\u0001b"',
        "1",
    ],
)
def test_decode_uri_errors(data):
    with pytest.raises(DecodeError):
        decode_uri(data)