"""Settings of the JSON Schema parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from oaskit.external import ExternalResolver, NoExternal
from oaskit.raw_schema import RawSchema


class ReferenceResolveError(LookupError):
    """Raised when a reference cannot be resolved."""


@runtime_checkable
class ReferenceResolver(Protocol):
    """Resolves local references to raw schemas."""

    def resolve_reference(self, ref: str) -> RawSchema:
        ...


class NoReferenceResolver:
    """Resolver used when none is given; it resolves nothing."""

    def resolve_reference(self, ref: str) -> RawSchema:
        raise ReferenceResolveError("reference resolver is not provided")


@dataclass
class Settings:
    """Parser settings.

    ``file`` names the parsed file for error messages. With ``infer_types``
    a schema without a type gets one from its other fields, e.g. "array"
    when it has "items".
    """

    external: Optional[ExternalResolver] = None
    resolver: Optional[ReferenceResolver] = None
    file: Any = ""
    infer_types: bool = False

    def __post_init__(self) -> None:
        if self.external is None:
            self.external = NoExternal()
        if self.resolver is None:
            self.resolver = NoReferenceResolver()