"""Parsed JSON Schema model."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from oaskit.position import Locator
from oaskit.raw_schema import XML
from oaskit.schema_values import Num


class SchemaType(str, enum.Enum):
    """JSON Schema type; EMPTY is used by oneOf, anyOf and allOf schemas."""

    EMPTY = ""
    OBJECT = "object"
    ARRAY = "array"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


@dataclass
class XProperty:
    """Per-property extension fields."""

    name: Optional[str] = None
    locator: Locator = field(default_factory=Locator)


@dataclass
class Schema:
    """A parsed JSON Schema.

    ``examples`` hold raw JSON texts.
    """

    x_ogen_name: str = ""
    ref: str = ""

    type: SchemaType = SchemaType.EMPTY
    format: str = ""
    content_encoding: str = ""
    content_media_type: str = ""

    summary: str = ""
    description: str = ""
    deprecated: bool = False

    item: Optional[Schema] = None
    items: list[Schema] = field(default_factory=list)
    additional_properties: Optional[bool] = None
    pattern_properties: list[PatternProperty] = field(default_factory=list)
    enum: list[Any] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    required: list[str] = field(default_factory=list)

    nullable: bool = False

    one_of: list[Schema] = field(default_factory=list)
    any_of: list[Schema] = field(default_factory=list)
    all_of: list[Schema] = field(default_factory=list)

    discriminator: Optional[Discriminator] = None
    xml: Optional[XML] = None

    maximum: Num = field(default_factory=Num)
    exclusive_maximum: bool = False
    minimum: Num = field(default_factory=Num)
    exclusive_minimum: bool = False
    multiple_of: Num = field(default_factory=Num)

    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: str = ""

    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False

    max_properties: Optional[int] = None
    min_properties: Optional[int] = None

    examples: list[str] = field(default_factory=list)
    default: Any = None
    default_set: bool = False

    extra_tags: dict[str, str] = field(default_factory=dict)

    locator: Locator = field(default_factory=Locator)

    def add_example(self, example: str) -> None:
        """Record an example; empty examples are ignored."""
        if example:
            self.examples.append(example)


@dataclass
class Property:
    """A property of an object schema."""

    name: str = ""
    description: str = ""
    schema: Optional[Schema] = None
    required: bool = False
    x: XProperty = field(default_factory=XProperty)


@dataclass
class PatternProperty:
    """Schema for properties whose names match a pattern."""

    pattern: str = ""
    schema: Optional[Schema] = None


@dataclass
class Discriminator:
    """Discriminator of oneOf, anyOf and allOf variants."""

    property_name: str = ""
    mapping: dict[str, Schema] = field(default_factory=dict)
    locator: Locator = field(default_factory=Locator)