"""Conversion of ECMA-262 regular expressions to the RE2 dialect."""

from __future__ import annotations

from typing import Optional

WHITESPACE_CHARS = (
    " \f\n\r\t\v"
    "\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029"
    "\u202f\u205f"
    "\u3000\ufeff"
)
RE2_DOT = "[^\r\n\u2028\u2029]"

_SIMPLE_ESCAPES = frozenset("BdDwW\\fnrtv")


class RegexConversionError(ValueError):
    """Raised when an ECMA-262 pattern has no RE2 equivalent or is malformed."""

    def __init__(self, message: str, fatal: bool) -> None:
        super().__init__(f"syntax: {message}" if fatal else message)
        self.fatal = fatal


def _digit_value(char: Optional[str]) -> int:
    if char is None:
        return 16
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    return 16


def _is_ascii_identifier_part(char: str) -> bool:
    return char in "$_\\" or (char.isascii() and char.isalnum())


def _small_hex(value: int) -> str:
    return ("\\x" if value >= 16 else "\\x0") + format(value, "x")


class _Converter:
    def __init__(self, pattern: str) -> None:
        self.source = pattern
        self.length = len(pattern)
        self.char: Optional[str] = None
        self.char_offset = 0
        self.offset = 0
        self.error: Optional[RegexConversionError] = None
        self.out: list[str] = []
        # While not -1, the output is the unchanged prefix source[:pass_offset].
        self.pass_offset = 0

    def result(self) -> str:
        if self.pass_offset != -1:
            return self.source[: self.pass_offset]
        return "".join(self.out)

    def run(self) -> str:
        self.read()
        self.scan()
        if self.error is not None:
            raise self.error
        return self.result()

    def read(self) -> None:
        if self.offset < self.length:
            self.char_offset = self.offset
            self.char = self.source[self.offset]
            self.offset += 1
        else:
            self.char_offset = self.length
            self.char = None

    def stop_passing(self) -> None:
        self.out.append(self.source[: self.pass_offset])
        self.pass_offset = -1

    def write(self, text: str) -> None:
        if self.pass_offset != -1:
            self.stop_passing()
        self.out.append(text)

    def pass_char(self) -> None:
        if self.pass_offset == self.char_offset:
            self.pass_offset = self.offset
        else:
            if self.pass_offset != -1:
                self.stop_passing()
            if self.char is not None:
                self.out.append(self.char)
        self.read()

    def pass_string(self, start: int, end: int) -> None:
        if self.pass_offset == start:
            self.pass_offset = end
            return
        if self.pass_offset != -1:
            self.stop_passing()
        self.out.append(self.source[start:end])

    def fail(self, fatal: bool, message: str) -> None:
        if self.error is None:
            self.error = RegexConversionError(message, fatal)
        self.offset = self.length
        self.char = None

    def scan(self) -> None:
        while self.char is not None:
            char = self.char
            if char == "\\":
                self.read()
                self.scan_escape(False)
            elif char == "(":
                self.pass_char()
                self.scan_group()
            elif char == "[":
                self.scan_bracket()
            elif char == ")":
                self.fail(True, "Unmatched ')'")
                return
            elif char == ".":
                self.write(RE2_DOT)
                self.read()
            else:
                self.pass_char()

    def scan_group(self) -> None:
        rest = self.source[self.char_offset :]
        if len(rest) > 1 and rest[0] == "?":
            kind = rest[1]
            head = self.source[self.char_offset : self.char_offset + 2]
            if kind in "=!":
                self.fail(False, f"re2: Invalid ({head}) <lookahead>")
                return
            if kind == "<":
                self.fail(False, f"re2: Invalid ({head}) <lookbehind>")
                return
            if kind != ":":
                self.fail(True, "Invalid group")
                return
        while self.char is not None and self.char != ")":
            char = self.char
            if char == "\\":
                self.read()
                self.scan_escape(False)
            elif char == "(":
                self.pass_char()
                self.scan_group()
            elif char == "[":
                self.scan_bracket()
            elif char == ".":
                self.write(RE2_DOT)
                self.read()
            else:
                self.pass_char()
        if self.char != ")":
            self.fail(True, "Unterminated group")
            return
        self.pass_char()

    def scan_bracket(self) -> None:
        rest = self.source[self.char_offset :]
        if rest.startswith("[]"):
            self.write("[^\x00-\U0001FFFF]")
            self.offset += 1
            self.read()
            return
        if rest.startswith("[^]"):
            self.write("[\x00-\U0001FFFF]")
            self.offset += 2
            self.read()
            return
        self.pass_char()
        while self.char is not None and self.char != "]":
            if self.char == "\\":
                self.read()
                self.scan_escape(True)
                continue
            self.pass_char()
        if self.char != "]":
            self.fail(True, "Unterminated character class")
            return
        self.pass_char()

    def scan_escape(self, in_class: bool) -> None:
        start = self.char_offset
        char = self.char

        if char is not None and char in "01234567":
            value = 0
            size = 0
            while (digit := _digit_value(self.char)) < 8:
                value = value * 8 + digit
                self.read()
                size += 1
            if size == 1:
                if value != 0:
                    self.fail(False, f"re2: Invalid \\{value} <backreference>")
                    return
                self.pass_string(start - 1, self.char_offset)
                return
            self.write(_small_hex(value))
            return

        if char is not None and char in "89":
            self.read()
            self.fail(
                False,
                f"re2: Invalid \\{self.source[start:self.char_offset]} <backreference>",
            )
            return

        if char == "x":
            self.read()
            length = 2
        elif char == "u":
            self.read()
            if self.char == "{":
                self.read()
                length = 0
            else:
                length = 4
        elif char == "b" and in_class:
            self.write("\\x08")
            self.read()
            return
        elif char is not None and (char == "b" or char in _SIMPLE_ESCAPES):
            self.pass_string(start - 1, self.offset)
            self.read()
            return
        elif char == "c":
            self.read()
            letter = self.char
            if letter is not None and "a" <= letter <= "z":
                value = ord(letter) - ord("a") + 1
            elif letter is not None and "A" <= letter <= "Z":
                value = ord(letter) - ord("A") + 1
            else:
                self.write("c")
                return
            self.write(_small_hex(value))
            self.read()
            return
        elif char == "s":
            self.write(WHITESPACE_CHARS if in_class else f"[{WHITESPACE_CHARS}]")
            self.read()
            return
        elif char == "S":
            if in_class:
                self.fail(False, "S in class")
                return
            self.write(f"[^{WHITESPACE_CHARS}]")
            self.read()
            return
        else:
            if char is None or char == "$" or (
                char.isascii() and not _is_ascii_identifier_part(char)
            ):
                self.pass_string(start - 1, self.offset)
                self.read()
                return
            # Unnecessary escape of an identifier character: drop the backslash.
            self.pass_char()
            return

        value_start = self.char_offset
        if length > 0:
            for _ in range(length):
                if _digit_value(self.char) >= 16:
                    self.pass_string(start, self.char_offset)
                    return
                self.read()
        else:
            while self.char != "}" and self.char is not None:
                if _digit_value(self.char) >= 16:
                    self.pass_string(start, self.char_offset)
                    return
                self.read()

        if length in (0, 4):
            self.write("\\x{")
            self.pass_string(value_start, self.char_offset)
            if length != 0:
                self.write("}")
        else:
            self.pass_string(start - 1, value_start + 2)


def convert(pattern: str) -> str:
    """Convert an ECMA-262 regular expression to an RE2 one.

    Raises RegexConversionError when the pattern is malformed or uses
    features RE2 lacks (lookarounds, backreferences).
    """
    if not pattern:
        return ""
    return _Converter(pattern).run()