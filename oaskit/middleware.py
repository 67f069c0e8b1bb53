"""Operation middleware: request/response envelopes and chaining."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


class ParameterLocation(str, enum.Enum):
    """Where an operation parameter is carried."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParameterKey:
    """Key of a parameter: its name and location."""

    name: str
    location: ParameterLocation


class Parameters(dict):
    """Operation parameters keyed by ParameterKey.

    The lookup helpers raise KeyError when the parameter is absent.
    """

    def _find(self, name: str, location: ParameterLocation) -> Any:
        return self[ParameterKey(name, location)]

    def query(self, name: str) -> Any:
        """Value of the query parameter ``name``."""
        return self._find(name, ParameterLocation.QUERY)

    def header(self, name: str) -> Any:
        """Value of the header parameter ``name``."""
        return self._find(name, ParameterLocation.HEADER)

    def path(self, name: str) -> Any:
        """Value of the path parameter ``name``."""
        return self._find(name, ParameterLocation.PATH)

    def cookie(self, name: str) -> Any:
        """Value of the cookie parameter ``name``."""
        return self._find(name, ParameterLocation.COOKIE)


@dataclass
class Request:
    """Request passed through a middleware chain."""

    context: Any = None
    operation_name: str = ""
    operation_summary: str = ""
    operation_id: str = ""
    body: Any = None
    params: Parameters = field(default_factory=Parameters)
    raw: Any = None


@dataclass
class Response:
    """Response returned through a middleware chain."""

    type: Any = None


Next = Callable[[Request], Response]
Middleware = Callable[[Request, Next], Response]


def chain_middlewares(*args: Middleware) -> Middleware:
    """Combine middlewares into one that runs them in the given order."""
    if not args:
        return lambda request, next_: next_(request)
    head = args[0]
    tail = chain_middlewares(*args[1:])

    def chained(request: Request, next_: Next) -> Response:
        return head(request, lambda req: tail(req, next_))

    return chained


def hook_middleware(
    middleware: Middleware,
    request: Request,
    unpack: Optional[Callable[[Parameters], Any]],
    callback: Callable[[Any, Any, Any], Any],
) -> Any:
    """Run ``callback`` behind ``middleware`` and return the handler's result.

    The callback receives the request context, body and unpacked parameters
    (None when no ``unpack`` is given). Exceptions propagate unchanged.
    """

    def handler(req: Request) -> Response:
        params = unpack(req.params) if unpack is not None else None
        return Response(type=callback(req.context, req.body, params))

    return middleware(request, handler).type