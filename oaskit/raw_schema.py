"""Unparsed JSON Schema objects as read from a specification document."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from oaskit.schema_values import (
    Enum,
    Extensions,
    Num,
    OpenAPICommon,
    SchemaValueError,
    json_to_yaml_node,
)


def _type_name(value: Any) -> str:
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
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise SchemaValueError(f"cannot unmarshal {_type_name(data)} into {what}")
    return data


def _dump_json(value: Any) -> str:
    try:
        return json.dumps(
            value, allow_nan=False, ensure_ascii=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as exc:
        raise SchemaValueError(f"cannot encode {value!r} as JSON") from exc


def _str(data: Mapping, key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaValueError(f"{key}: expected string, got {_type_name(value)}")
    return value


def _bool(data: Mapping, key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaValueError(f"{key}: expected bool, got {_type_name(value)}")
    return value


def _uint(data: Mapping, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaValueError(f"{key}: expected unsigned integer, got {value!r}")
    if value >= 1 << 64:
        raise SchemaValueError(f"{key}: value {value} overflows uint64")
    return value


def _num(data: Mapping, key: str) -> Num:
    value = data.get(key)
    if value is None:
        return Num()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaValueError(f"{key}: expected number, got {_type_name(value)}")
    return Num.from_json(_dump_json(value))


def _raw(data: Mapping, key: str) -> str:
    if key not in data:
        return ""
    return _dump_json(data[key])


def _str_list(data: Mapping, key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SchemaValueError(f"{key}: expected array of strings")
    return list(value)


def _schema_list(data: Mapping, key: str) -> list[RawSchema]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaValueError(f"{key}: expected array, got {_type_name(value)}")
    return [RawSchema.from_dict(item) for item in value]


def _schema_map(data: Mapping, key: str) -> dict[str, RawSchema]:
    value = data.get(key)
    if value is None:
        return {}
    value = _mapping(value, key)
    return {str(name): RawSchema.from_dict(item) for name, item in value.items()}


def _additional(data: Mapping) -> Union[bool, RawSchema, None]:
    value = data.get("additionalProperties")
    if value is None or isinstance(value, bool):
        return value
    return RawSchema.from_dict(value)


def _items(data: Mapping) -> Union[RawSchema, list[RawSchema], None]:
    value = data.get("items")
    if value is None:
        return None
    if isinstance(value, list):
        return [RawSchema.from_dict(item) for item in value]
    return RawSchema.from_dict(value)


def _enum(data: Mapping) -> Enum:
    value = data.get("enum")
    if value is None:
        return Enum()
    if not isinstance(value, list):
        raise SchemaValueError(f"cannot unmarshal {_type_name(value)} into Enum")
    return Enum(_dump_json(item) for item in value)


def _common(data: Mapping) -> OpenAPICommon:
    extensions = Extensions(
        (key, json_to_yaml_node(_dump_json(value)))
        for key, value in data.items()
        if isinstance(key, str) and key.startswith("x-")
    )
    return OpenAPICommon(extensions=extensions)


def _put(out: dict, key: str, value: Any) -> None:
    """Set ``key`` unless the value is empty (omitempty)."""
    if value is None or value is False:
        return
    if isinstance(value, (str, list, dict)) and not value:
        return
    out[key] = value


def _num_value(num: Num) -> Any:
    return json.loads(num.raw) if num.raw else None


def _put_common(out: dict, common: OpenAPICommon) -> None:
    out.update(json.loads(common.to_json()))


@dataclass
class XML:
    """XML model metadata of a schema."""

    name: str = ""
    namespace: str = ""
    prefix: str = ""
    attribute: bool = False
    wrapped: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> XML:
        """Read an XML object from a decoded document."""
        data = _mapping(data, "XML")
        return cls(
            name=_str(data, "name"),
            namespace=_str(data, "namespace"),
            prefix=_str(data, "prefix"),
            attribute=_bool(data, "attribute"),
            wrapped=_bool(data, "wrapped"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with empty fields left out."""
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        _put(out, "namespace", self.namespace)
        _put(out, "prefix", self.prefix)
        _put(out, "attribute", self.attribute)
        _put(out, "wrapped", self.wrapped)
        return out


@dataclass
class RawDiscriminator:
    """Unparsed discriminator object for oneOf, anyOf and allOf."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)
    common: OpenAPICommon = field(default_factory=OpenAPICommon)

    @classmethod
    def from_dict(cls, data: Any) -> RawDiscriminator:
        """Read a discriminator object from a decoded document."""
        data = _mapping(data, "RawDiscriminator")
        mapping = data.get("mapping") or {}
        mapping = _mapping(mapping, "mapping")
        if not all(isinstance(v, str) for v in mapping.values()):
            raise SchemaValueError("mapping: expected string values")
        return cls(
            property_name=_str(data, "propertyName"),
            mapping={str(k): v for k, v in mapping.items()},
            common=_common(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping; propertyName is always present."""
        out: dict[str, Any] = {"propertyName": self.property_name}
        _put(out, "mapping", dict(self.mapping))
        _put_common(out, self.common)
        return out


@dataclass
class RawSchema:
    """Unparsed JSON Schema.

    ``default`` and ``example`` hold raw JSON text; an empty string means unset.
    """

    ref: str = ""
    summary: str = ""
    description: str = ""
    type: str = ""
    format: str = ""
    properties: dict[str, RawSchema] = field(default_factory=dict)
    additional_properties: Union[bool, RawSchema, None] = None
    pattern_properties: dict[str, RawSchema] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    items: Union[RawSchema, list[RawSchema], None] = None
    nullable: bool = False
    all_of: list[RawSchema] = field(default_factory=list)
    one_of: list[RawSchema] = field(default_factory=list)
    any_of: list[RawSchema] = field(default_factory=list)
    enum: Enum = field(default_factory=Enum)
    multiple_of: Num = field(default_factory=Num)
    maximum: Num = field(default_factory=Num)
    exclusive_maximum: bool = False
    minimum: Num = field(default_factory=Num)
    exclusive_minimum: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: str = ""
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    default: str = ""
    deprecated: bool = False
    content_encoding: str = ""
    content_media_type: str = ""
    discriminator: Optional[RawDiscriminator] = None
    xml: Optional[XML] = None
    example: str = ""
    common: OpenAPICommon = field(default_factory=OpenAPICommon)

    @classmethod
    def from_dict(cls, data: Any) -> RawSchema:
        """Read a schema from a decoded JSON/YAML document; unknown keys are ignored."""
        data = _mapping(data, "RawSchema")
        discriminator = data.get("discriminator")
        xml = data.get("xml")
        return cls(
            ref=_str(data, "$ref"),
            summary=_str(data, "summary"),
            description=_str(data, "description"),
            type=_str(data, "type"),
            format=_str(data, "format"),
            properties=_schema_map(data, "properties"),
            additional_properties=_additional(data),
            pattern_properties=_schema_map(data, "patternProperties"),
            required=_str_list(data, "required"),
            items=_items(data),
            nullable=_bool(data, "nullable"),
            all_of=_schema_list(data, "allOf"),
            one_of=_schema_list(data, "oneOf"),
            any_of=_schema_list(data, "anyOf"),
            enum=_enum(data),
            multiple_of=_num(data, "multipleOf"),
            maximum=_num(data, "maximum"),
            exclusive_maximum=_bool(data, "exclusiveMaximum"),
            minimum=_num(data, "minimum"),
            exclusive_minimum=_bool(data, "exclusiveMinimum"),
            max_length=_uint(data, "maxLength"),
            min_length=_uint(data, "minLength"),
            pattern=_str(data, "pattern"),
            max_items=_uint(data, "maxItems"),
            min_items=_uint(data, "minItems"),
            unique_items=_bool(data, "uniqueItems"),
            max_properties=_uint(data, "maxProperties"),
            min_properties=_uint(data, "minProperties"),
            default=_raw(data, "default"),
            deprecated=_bool(data, "deprecated"),
            content_encoding=_str(data, "contentEncoding"),
            content_media_type=_str(data, "contentMediaType"),
            discriminator=(
                RawDiscriminator.from_dict(discriminator)
                if discriminator is not None
                else None
            ),
            xml=XML.from_dict(xml) if xml is not None else None,
            example=_raw(data, "example"),
            common=_common(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with empty fields left out."""
        out: dict[str, Any] = {}
        _put(out, "$ref", self.ref)
        _put(out, "summary", self.summary)
        _put(out, "description", self.description)
        _put(out, "type", self.type)
        _put(out, "format", self.format)
        _put(out, "properties", {k: v.to_dict() for k, v in self.properties.items()})
        if isinstance(self.additional_properties, bool):
            out["additionalProperties"] = self.additional_properties
        elif self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties.to_dict()
        _put(
            out,
            "patternProperties",
            {k: v.to_dict() for k, v in self.pattern_properties.items()},
        )
        _put(out, "required", list(self.required))
        if isinstance(self.items, list):
            out["items"] = [item.to_dict() for item in self.items]
        elif self.items is not None:
            out["items"] = self.items.to_dict()
        _put(out, "nullable", self.nullable)
        _put(out, "allOf", [s.to_dict() for s in self.all_of])
        _put(out, "oneOf", [s.to_dict() for s in self.one_of])
        _put(out, "anyOf", [s.to_dict() for s in self.any_of])
        _put(out, "enum", [json.loads(raw) for raw in self.enum])
        _put(out, "multipleOf", _num_value(self.multiple_of))
        _put(out, "maximum", _num_value(self.maximum))
        _put(out, "exclusiveMaximum", self.exclusive_maximum)
        _put(out, "minimum", _num_value(self.minimum))
        _put(out, "exclusiveMinimum", self.exclusive_minimum)
        _put(out, "maxLength", self.max_length)
        _put(out, "minLength", self.min_length)
        _put(out, "pattern", self.pattern)
        _put(out, "maxItems", self.max_items)
        _put(out, "minItems", self.min_items)
        _put(out, "uniqueItems", self.unique_items)
        _put(out, "maxProperties", self.max_properties)
        _put(out, "minProperties", self.min_properties)
        if self.default:
            out["default"] = json.loads(self.default)
        _put(out, "deprecated", self.deprecated)
        _put(out, "contentEncoding", self.content_encoding)
        _put(out, "contentMediaType", self.content_media_type)
        if self.discriminator is not None:
            out["discriminator"] = self.discriminator.to_dict()
        if self.xml is not None:
            out["xml"] = self.xml.to_dict()
        if self.example:
            out["example"] = json.loads(self.example)
        _put_common(out, self.common)
        return out