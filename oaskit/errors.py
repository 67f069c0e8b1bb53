"""Error types raised by generated handlers and their mapping to HTTP responses."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Iterator, Optional

from oaskit.middleware import ParameterLocation


def _go_quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass(frozen=True)
class OperationContext:
    """Name and spec ID of the operation an error belongs to."""

    name: str = ""
    id: str = ""


class OgenError(Exception):
    """An error tied to an operation, carrying the HTTP code to respond with."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, operation: OperationContext, err: BaseException) -> None:
        super().__init__(operation, err)
        self.operation = operation
        self.err = err

    @property
    def operation_name(self) -> str:
        return self.operation.name

    @property
    def operation_id(self) -> str:
        return self.operation.id

    def code(self) -> int:
        """HTTP status code to respond with."""
        return int(self.status)

    def unwrap(self) -> BaseException:
        return self.err

    def _prefix(self) -> str:
        return f"operation {self.operation_name}"

    def __str__(self) -> str:
        return f"{self._prefix()}: {self.err}"


class SecurityError(OgenError):
    """Raised when a security handler rejects a request."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(
        self, operation: OperationContext, security: str, err: BaseException
    ) -> None:
        super().__init__(operation, err)
        self.security = security

    def _prefix(self) -> str:
        return f"operation {self.operation_name}: security {_go_quote(self.security)}"


class DecodeRequestError(OgenError):
    """Raised when a request body cannot be decoded."""

    status = HTTPStatus.BAD_REQUEST

    def _prefix(self) -> str:
        return f"operation {self.operation_name}: decode request"


class DecodeParamsError(OgenError):
    """Raised when operation parameters cannot be decoded."""

    status = HTTPStatus.BAD_REQUEST

    def _prefix(self) -> str:
        return f"operation {self.operation_name}: decode params"


class DecodeParamError(Exception):
    """Raised when a single parameter cannot be decoded."""

    def __init__(
        self, name: str, location: ParameterLocation, err: BaseException
    ) -> None:
        super().__init__(name, location, err)
        self.name = name
        self.location = location
        self.err = err

    def unwrap(self) -> BaseException:
        return self.err

    def __str__(self) -> str:
        return f"{self.location}: {_go_quote(self.name)}: {self.err}"


class DecodeBodyError(Exception):
    """Raised when a request or response body cannot be decoded."""

    def __init__(self, content_type: str, body: bytes, err: BaseException) -> None:
        super().__init__(content_type, body, err)
        self.content_type = content_type
        self.body = body
        self.err = err

    def unwrap(self) -> BaseException:
        return self.err

    def __str__(self) -> str:
        return f"decode {self.content_type}: {self.err}"


class SecurityRequirementNotSatisfied(Exception):
    """Raised when no security requirement of an operation is satisfied."""

    def __init__(self, message: str = "security requirement is not satisfied") -> None:
        super().__init__(message)


class SkipClientSecurity(Exception):
    """Raised by a client security source to leave a scheme out of the request."""

    def __init__(self, message: str = "skip client security") -> None:
        super().__init__(message)


class SkipServerSecurity(Exception):
    """Raised by a server security handler to skip a scheme."""

    def __init__(self, message: str = "skip server security") -> None:
        super().__init__(message)


def _chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        unwrap = getattr(current, "unwrap", None)
        current = unwrap() if callable(unwrap) else current.__cause__


def error_code(err: BaseException) -> int:
    """HTTP status code for an error; 500 unless the error chain says otherwise."""
    chain = list(_chain(err))
    if any(isinstance(e, NotImplementedError) for e in chain):
        return int(HTTPStatus.NOT_IMPLEMENTED)
    for e in chain:
        if isinstance(e, OgenError):
            return e.code()
    return int(HTTPStatus.INTERNAL_SERVER_ERROR)


def error_response(err: BaseException) -> tuple[int, dict[str, str], bytes]:
    """Default error response: status code, headers and JSON body."""
    body = json.dumps(
        {"error_message": str(err)}, ensure_ascii=False, separators=(",", ":")
    ).encode("utf-8")
    return error_code(err), {"Content-Type": "application/json"}, body