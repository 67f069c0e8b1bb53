"""Raw JSON values of schemas: numbers, enums and "x-" extensions, with YAML conversion."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

import yaml

from oaskit.position import Locator

_YAML_PREFIX = "tag:yaml.org,2002:"
_IMPLICIT_TAGS = frozenset(
    _YAML_PREFIX + name for name in ("str", "int", "float", "bool", "null", "timestamp")
)

_NULL_VALUES = frozenset({"", "~", "null", "Null", "NULL"})
_BOOL_VALUES = frozenset({"true", "True", "TRUE", "false", "False", "FALSE"})
_INT_PLAIN = re.compile(r"[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+")
_FLOAT_PLAIN = re.compile(
    r"[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN)"
)
_JSON_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")
_TRUE_WORDS = frozenset({"true", "yes", "on", "y"})
_FALSE_WORDS = frozenset({"false", "no", "off", "n"})

RawJSON = Union[str, bytes, bytearray]


class SchemaValueError(ValueError):
    """Raised when a YAML or JSON value has the wrong shape."""


def _short_tag(tag: str) -> str:
    if tag.startswith(_YAML_PREFIX):
        return "!!" + tag[len(_YAML_PREFIX):]
    return tag


def _full_tag(name: str) -> str:
    return _YAML_PREFIX + name


def _resolve_plain(value: str) -> str:
    if value in _NULL_VALUES:
        return "null"
    if value in _BOOL_VALUES:
        return "bool"
    if _INT_PLAIN.fullmatch(value):
        return "int"
    if _FLOAT_PLAIN.fullmatch(value):
        return "float"
    return "str"


def _scalar_kind(node: yaml.ScalarNode) -> str:
    """Type of a scalar: plain scalars are resolved by the YAML 1.2 core schema."""
    tag = node.tag or ""
    if node.style is None and tag in _IMPLICIT_TAGS:
        return _resolve_plain(node.value)
    short = _short_tag(tag)
    if short in ("!!int", "!!float", "!!bool", "!!null"):
        return short[2:]
    return "str"


def _node_short_tag(node: yaml.Node) -> str:
    if isinstance(node, yaml.ScalarNode):
        return "!!" + _scalar_kind(node)
    if isinstance(node, yaml.MappingNode):
        return "!!map"
    if isinstance(node, yaml.SequenceNode):
        return "!!seq"
    return _short_tag(getattr(node, "tag", "") or "")


def _int_value(text: str) -> int:
    body = text.replace("_", "")
    sign = -1 if body.startswith("-") else 1
    body = body.lstrip("+-")
    lowered = body.lower()
    try:
        if lowered.startswith("0x"):
            return sign * int(body[2:], 16)
        if lowered.startswith("0o"):
            return sign * int(body[2:], 8)
        if lowered.startswith("0b"):
            return sign * int(body[2:], 2)
        return sign * int(body, 10)
    except ValueError as exc:
        raise SchemaValueError(f"invalid integer {text!r}") from exc


def _float_value(text: str) -> float:
    body = text.replace("_", "").lower()
    if body in (".inf", "+.inf"):
        return math.inf
    if body == "-.inf":
        return -math.inf
    if body == ".nan":
        return math.nan
    try:
        return float(body)
    except ValueError as exc:
        raise SchemaValueError(f"invalid float {text!r}") from exc


def _bool_value(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise SchemaValueError(f"invalid bool {text!r}")


def _format_float(value: float) -> str:
    if not math.isfinite(value):
        raise SchemaValueError(f"unsupported value {value!r}")
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa}e{'-' if exp < 0 else '+'}{abs(exp)}"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _scalar_json(node: yaml.ScalarNode) -> str:
    kind = _scalar_kind(node)
    if kind == "null":
        return "null"
    if kind == "bool":
        return "true" if _bool_value(node.value) else "false"
    if kind == "int":
        return str(_int_value(node.value))
    if kind == "float":
        return _format_float(_float_value(node.value))
    return _quote(node.value)


def _node_json(node: yaml.Node) -> str:
    if isinstance(node, yaml.ScalarNode):
        return _scalar_json(node)
    if isinstance(node, yaml.SequenceNode):
        return "[" + ",".join(_node_json(item) for item in node.value) + "]"
    if isinstance(node, yaml.MappingNode):
        fields = []
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise SchemaValueError(
                    f"cannot use {_node_short_tag(key_node)} as an object key"
                )
            fields.append(f"{_quote(key_node.value)}:{_node_json(value_node)}")
        return "{" + ",".join(fields) + "}"
    raise SchemaValueError(f"unexpected node {node!r}")


def yaml_node_to_json(node: yaml.Node) -> str:
    """Convert a YAML node to raw JSON text."""
    return _node_json(node)


@dataclass(frozen=True)
class _RawNumber:
    text: str


class _Object(list):
    """Ordered key/value pairs of a parsed JSON object."""


def _reject_constant(name: str) -> Any:
    raise SchemaValueError(f"invalid literal {name!r}")


def _parse_json(raw: RawJSON) -> Any:
    return json.loads(
        raw,
        parse_int=_RawNumber,
        parse_float=_RawNumber,
        parse_constant=_reject_constant,
        object_pairs_hook=_Object,
    )


def _string_node(text: str) -> yaml.ScalarNode:
    style = None if _resolve_plain(text) == "str" else '"'
    return yaml.ScalarNode(_full_tag("str"), text, style=style)


def _value_to_node(value: Any) -> yaml.Node:
    if value is None:
        return yaml.ScalarNode(_full_tag("null"), "null")
    if value is True or value is False:
        return yaml.ScalarNode(_full_tag("bool"), "true" if value else "false")
    if isinstance(value, _RawNumber):
        kind = "float" if any(c in value.text for c in ".eE") else "int"
        return yaml.ScalarNode(_full_tag(kind), value.text)
    if isinstance(value, str):
        return _string_node(value)
    if isinstance(value, _Object):
        pairs = [(_string_node(key), _value_to_node(item)) for key, item in value]
        return yaml.MappingNode(_full_tag("map"), pairs)
    return yaml.SequenceNode(_full_tag("seq"), [_value_to_node(item) for item in value])


def json_to_yaml_node(raw: RawJSON) -> yaml.Node:
    """Convert raw JSON text to a YAML node, keeping numbers as written."""
    return _value_to_node(_parse_json(raw))


@dataclass(frozen=True)
class Num:
    """A JSON number kept in its textual form."""

    raw: str = ""

    @classmethod
    def from_yaml_node(cls, node: yaml.Node) -> Num:
        """Read a number from an int or float YAML scalar."""
        if not isinstance(node, yaml.ScalarNode) or _scalar_kind(node) not in (
            "int",
            "float",
        ):
            raise SchemaValueError(f"cannot unmarshal {_node_short_tag(node)} into Num")
        return cls(yaml_node_to_json(node))

    @classmethod
    def from_json(cls, data: RawJSON) -> Num:
        """Read a number from raw JSON; strings are rejected."""
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        text = text.strip(" \t\n\r")
        if text.startswith('"'):
            raise SchemaValueError(f"unexpected string {text}")
        if not _JSON_NUMBER.fullmatch(text):
            raise SchemaValueError(f"invalid number {text!r}")
        return cls(text)

    def is_int(self) -> bool:
        """Whether the number is written as an integer."""
        return bool(self.raw) and not any(c in self.raw for c in ".eE")

    def to_yaml_node(self) -> yaml.ScalarNode:
        """YAML scalar holding the number."""
        return yaml.ScalarNode(_full_tag("int" if self.is_int() else "float"), self.raw)

    def to_json(self) -> str:
        """Raw JSON text of the number; "null" when unset."""
        return self.raw or "null"


class Enum(list):
    """Enum values of a schema as raw JSON texts."""

    @classmethod
    def from_yaml_node(cls, node: yaml.Node) -> Enum:
        """Read enum values from a YAML sequence."""
        if not isinstance(node, yaml.SequenceNode):
            raise SchemaValueError(f"cannot unmarshal {_node_short_tag(node)} into Enum")
        return cls(yaml_node_to_json(item) for item in node.value)

    def to_yaml_node(self) -> yaml.SequenceNode:
        """YAML sequence of the enum values."""
        return yaml.SequenceNode(
            _full_tag("seq"), [json_to_yaml_node(raw) for raw in self]
        )


def _is_extension_key(key: str) -> bool:
    return key.startswith("x-")


class Extensions(dict):
    """Specification extensions: "x-" keys mapped to their YAML nodes."""

    @classmethod
    def from_yaml_node(cls, node: yaml.Node) -> Extensions:
        """Collect the "x-" fields of a YAML mapping."""
        if not isinstance(node, yaml.MappingNode):
            raise SchemaValueError(
                f"cannot unmarshal {_node_short_tag(node)} into Extensions"
            )
        result = cls()
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise SchemaValueError(
                    f"cannot unmarshal {_node_short_tag(key_node)} into string"
                )
            if _is_extension_key(key_node.value) and value_node is not None:
                result[key_node.value] = value_node
        return result

    @classmethod
    def from_json(cls, data: RawJSON) -> Extensions:
        """Collect the "x-" fields of a JSON object."""
        value = _parse_json(data)
        if not isinstance(value, _Object):
            raise SchemaValueError("expected JSON object")
        result = cls()
        for key, item in value:
            if _is_extension_key(key):
                result[key] = _value_to_node(item)
        return result

    def _items(self):
        return ((key, node) for key, node in self.items() if _is_extension_key(key))

    def to_yaml_node(self) -> yaml.MappingNode:
        """YAML mapping of the "x-" fields."""
        pairs = [
            (yaml.ScalarNode(_full_tag("str"), key), node) for key, node in self._items()
        ]
        return yaml.MappingNode(_full_tag("map"), pairs)

    def to_json(self) -> str:
        """Raw JSON object of the "x-" fields."""
        fields = (f"{_quote(key)}:{yaml_node_to_json(node)}" for key, node in self._items())
        return "{" + ",".join(fields) + "}"


@dataclass
class OpenAPICommon:
    """Fields common to OpenAPI objects: extensions and source location."""

    extensions: Extensions = field(default_factory=Extensions)
    locator: Locator = field(default_factory=Locator)

    @classmethod
    def from_yaml_node(cls, node: yaml.Node) -> OpenAPICommon:
        """Read extensions and the position of a YAML mapping."""
        try:
            extensions = Extensions.from_yaml_node(node)
        except SchemaValueError as exc:
            raise SchemaValueError(f"unmarshal extensions: {exc}") from exc
        return cls(extensions=extensions, locator=Locator.from_node(node))

    @classmethod
    def from_json(cls, data: RawJSON) -> OpenAPICommon:
        """Read extensions from a JSON object; the position stays unset."""
        return cls(extensions=Extensions.from_json(data))

    def to_yaml_node(self) -> yaml.MappingNode:
        """YAML mapping of the extensions."""
        return self.extensions.to_yaml_node()

    def to_json(self) -> str:
        """Raw JSON object of the extensions."""
        return self.extensions.to_json()