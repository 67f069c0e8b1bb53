"""Building blocks for OpenAPI v3 tooling: JSON codecs, document positions,
regex conversion, middleware, operation errors and JSON Schema models."""

__version__ = "0.1.0"

__all__ = [
    "ecmaregex",
    "enum_values",
    "errors",
    "external",
    "json_numbers",
    "json_values",
    "middleware",
    "position",
    "raw_schema",
    "schema",
    "schema_values",
    "settings",
]