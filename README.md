# oaskit

Building blocks for tools that read OpenAPI v3 documents, and for the
servers and clients such tools produce: JSON value codecs, positions of
values in YAML/JSON documents, conversion of ECMA-262 regular expressions,
middleware chaining, operation errors and JSON Schema data models.

Requires Python 3.10 or later and PyYAML.

## Installation

```
pip install oaskit
```

To run the test suite, install the `test` extra and run pytest:

```
pip install "oaskit[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `oaskit.json_numbers` | `marshal()` / `unmarshal()` for JSON, and numbers carried inside JSON strings: `encode_string_int*` / `decode_string_int*` for `int`, `int8`, `int16`, `int32`, `int64` with range checks, and `encode_string_float32/64` / `decode_string_float32/64`. Bad input raises `DecodeError`. |
| `oaskit.json_values` | `encode_mac` / `decode_mac` for hardware addresses; Unix timestamps in seconds, milliseconds, microseconds and nanoseconds, as JSON numbers (`encode_unix_*` / `decode_unix_*`) and as JSON strings (`encode_string_unix_*` / `decode_string_unix_*`); `encode_uri` / `decode_uri` for request URIs. |
| `oaskit.position` | `Position` (line, column and YAML node) with `from_node`, `key`, `field`, `index` and `with_filename`; `Locator`, an optional position with the same navigation. |
| `oaskit.ecmaregex` | `convert()` turns an ECMA-262 pattern into an RE2-style pattern, raising `RegexConversionError` for malformed patterns and for lookarounds and backreferences. |
| `oaskit.middleware` | `ParameterLocation`, `ParameterKey`, `Parameters` (with `query`, `header`, `path`, `cookie` lookups that raise `KeyError`), `Request`, `Response`, `chain_middlewares()` and `hook_middleware()`. |
| `oaskit.errors` | `OperationContext`, `OgenError` and its subclasses `SecurityError`, `DecodeRequestError`, `DecodeParamsError`; `DecodeParamError`, `DecodeBodyError`, `SecurityRequirementNotSatisfied`, `SkipClientSecurity`, `SkipServerSecurity`; `error_code()` and `error_response()`. |
| `oaskit.schema_values` | `yaml_node_to_json()`, `json_to_yaml_node()`, and `Num`, `Enum`, `Extensions`, `OpenAPICommon` with YAML and JSON conversion. |
| `oaskit.raw_schema` | `RawSchema`, `RawDiscriminator` and `XML`, read with `from_dict()` from a decoded document and written back with `to_dict()`. |
| `oaskit.schema` | The parsed schema model: `Schema`, `SchemaType`, `Property`, `PatternProperty`, `Discriminator`, `XProperty`. |
| `oaskit.enum_values` | `infer_json_type()`, `parse_json_value()`, `parse_enum_values()` and `handle_nullable_enum()`. |
| `oaskit.external` | `ExternalResolver` protocol, `NoExternal` (refuses every reference), `DefaultExternalResolver` / `new_external_resolver()` for `http`, `https` and `file` locations, `ExternalOptions`, `url_to_file_path()`. |
| `oaskit.settings` | `Settings` for a schema parser, `ReferenceResolver` protocol and `NoReferenceResolver`. |

## Examples

Numbers carried as JSON strings:

```python
from oaskit.json_numbers import decode_string_int8, encode_string_int8

decode_string_int8(b'"100"')   # 100
decode_string_int8(b'"1000"')  # raises DecodeError: overflows int8
encode_string_int8(-1)         # '"-1"'
```

Unix timestamps:

```python
from oaskit.json_values import decode_unix_seconds, encode_string_unix_milli

t = decode_unix_seconds(b"10")   # 1970-01-01 00:00:10+00:00
encode_string_unix_milli(t)      # '"10000"'
```

Finding where a value sits in a document:

```python
import yaml
from oaskit.position import Position

node = yaml.compose('{\n  "a": 1,\n  "b": {\n    "c": 2\n  }\n}')
pos = Position.from_node(node).field("b").field("c")
str(pos)                        # "4:10"
pos.with_filename("spec.json")  # "spec.json:4:10"
```

Converting a pattern:

```python
from oaskit.ecmaregex import RegexConversionError, convert

convert(r"\d+")    # r"\d+", unchanged
convert(r"\ca")    # r"\x01"
try:
    convert("^(?!examples/)")
except RegexConversionError as exc:
    print(exc)     # re2: Invalid (?!) <lookahead>
```

Chaining middlewares runs them in the order given, each wrapping the next:

```python
from oaskit.middleware import Request, Response, chain_middlewares, hook_middleware

calls = []

def first(request, next_):
    calls.append("first")
    return next_(request)

def second(request, next_):
    calls.append("second")
    return next_(request)

chained = chain_middlewares(first, second)
chained(Request(operation_name="getPet"), lambda request: Response(type="ok"))
# calls == ["first", "second", ...]

# hook_middleware runs a handler callback behind a middleware and returns its result.
hook_middleware(chained, Request(body="pet"), None, lambda ctx, body, params: body.upper())
# "PET"
```

Mapping an error to an HTTP response:

```python
from oaskit.errors import DecodeRequestError, OperationContext, error_code, error_response

err = DecodeRequestError(OperationContext(name="getPet", id="getPet"), ValueError("bad body"))
error_code(err)      # 400
error_response(err)  # (400, {"Content-Type": "application/json"},
                     #  b'{"error_message":"operation getPet: decode request: bad body"}')
```

`error_code()` returns 501 when a `NotImplementedError` is in the error's
chain, the error's own code for an `OgenError`, and 500 otherwise.

## What this package does not do

oaskit provides the pieces only. It has no command-line tool and does not
generate code. It does not parse a whole OpenAPI document into a
specification object, and it does not turn a `RawSchema` into a `Schema`;
`Settings` and the resolvers are there for such a parser but none is
included. It has no HTTP server or router; `error_response()` builds the
status, headers and body, and sending them is left to the caller.