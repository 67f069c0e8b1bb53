import pytest

from oaskit.ecmaregex import (
    RE2_DOT,
    WHITESPACE_CHARS,
    RegexConversionError,
    convert,
)


@pytest.mark.parametrize(
    "pattern",
    [
        r"\x20",
        r"\v",
        r"\t",
        r"\n",
        r"\d",
        r"\w",
        r"\w{1}",
        r"\w{1,}",
        r"\w{1,2}",
        r"\b",
        r"\B",
        r"\.",
        r"\[",
        r"\]",
        r"\(",
        r"\)",
        r"\{",
        r"\}",
        r"\\",
        r"\$",
    ],
)
def test_no_conversion_required(pattern):
    assert convert(pattern) == pattern


@pytest.mark.parametrize(
    "pattern, expected",
    [
        (r"\u000a", r"\x{000a}"),
        (r"\u{000a}", r"\x{000a}"),
        (r"\z", "z"),
        (r"\ca", r"\x01"),
        (r"\cA", r"\x01"),
        (r"\cb", r"\x02"),
        (r"\cB", r"\x02"),
        (r"[\b]", r"[\x08]"),
        (".*", RE2_DOT + "*"),
        (r"\s", "[" + WHITESPACE_CHARS + "]"),
        (r"\S", "[^" + WHITESPACE_CHARS + "]"),
        (r"[\s]", "[" + WHITESPACE_CHARS + "]"),
    ],
)
def test_conversion(pattern, expected):
    assert convert(pattern) == expected


def test_empty_pattern():
    assert convert("") == ""


def test_lookahead_is_not_convertible():
    with pytest.raises(RegexConversionError, match="lookahead") as info:
        convert("^(?!examples/)")
    assert info.value.fatal is False


@pytest.mark.parametrize("pattern", [")", "(?`)"])
def test_syntax_errors(pattern):
    with pytest.raises(RegexConversionError) as info:
        convert(pattern)
    assert info.value.fatal is True
    assert str(info.value).startswith("syntax:")


def test_backreference_is_rejected():
    with pytest.raises(RegexConversionError, match="backreference"):
        convert(r"(a)\1")


def test_plain_pattern_is_unchanged():
    assert convert("^[a-z]+(?:-[a-z]+)*$") == "^[a-z]+(?:-[a-z]+)*$"


def test_octal_escape():
    assert convert(r"\012") == r"\x0a"
    assert convert(r"\0") == r"\0"


def test_unterminated_group_and_class():
    with pytest.raises(RegexConversionError, match="Unterminated group"):
        convert("(abc")
    with pytest.raises(RegexConversionError, match="Unterminated character class"):
        convert("[abc")