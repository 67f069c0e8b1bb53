"""Fetching of external references over HTTP(S) or from the file system."""

from __future__ import annotations

import base64
import logging
import time
import urllib.request
from dataclasses import dataclass
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable
from urllib.error import HTTPError, URLError
from urllib.parse import SplitResult, unquote, urlsplit, urlunsplit

_LOGGER = logging.getLogger(__name__)


class ExternalReferenceError(Exception):
    """Raised when an external reference cannot be fetched."""

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        super().__init__(message)
        self.location = location


@runtime_checkable
class ExternalResolver(Protocol):
    """Fetches the contents of an external reference."""

    def get(self, location: str) -> bytes:
        """Return the contents at ``location``."""


class NoExternal:
    """Resolver that refuses every external reference."""

    def get(self, location: str) -> bytes:
        """Refuse to fetch ``location``."""
        _LOGGER.debug("Refusing external reference %s", location)
        raise ExternalReferenceError(
            "external references are disabled", location=location
        )


@dataclass
class ExternalOptions:
    """Options of the default external resolver.

    ``http_client`` is an object with an ``open(request)`` method, such as a
    urllib opener; unset fields fall back to defaults.
    """

    http_client: Any = None
    read_file: Optional[Callable[[str], bytes]] = None
    url_to_file_path: Optional[Callable[[SplitResult], str]] = None
    logger: Optional[logging.Logger] = None


def url_to_file_path(url: Union[str, SplitResult]) -> str:
    """Convert a file URL, or a URL without a scheme, to a local file path."""
    if isinstance(url, str):
        url = urlsplit(url)
    if url.scheme not in ("", "file"):
        raise ValueError(f"non-file URL {urlunsplit(url)!r}")
    host = url.netloc.rpartition("@")[2]
    if host not in ("", "localhost"):
        raise ValueError(f"file URL specifies non-local host {host!r}")
    if not url.path:
        raise ValueError("empty path")
    return urllib.request.url2pathname(url.path)


def _read_file(path: str) -> bytes:
    return Path(path).read_bytes()


def _redacted(url: SplitResult) -> str:
    userinfo, at, host = url.netloc.rpartition("@")
    if at and url.password is not None:
        user = userinfo.partition(":")[0]
        url = url._replace(netloc=f"{user}:xxxxx@{host}")
    return urlunsplit(url)


def _status_of(response: Any) -> int:
    status = getattr(response, "status", None)
    if status is None:
        status = response.getcode()
    return int(status)


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class DefaultExternalResolver:
    """Resolver for http, https and file references.

    A location without a scheme is read as a file path.
    """

    def __init__(self, options: Optional[ExternalOptions] = None) -> None:
        options = options or ExternalOptions()
        self._client = options.http_client or urllib.request.build_opener()
        self._read_file = options.read_file or _read_file
        self._url_to_file_path = options.url_to_file_path or url_to_file_path
        self._logger = options.logger or _LOGGER

    def _http_get(self, url: SplitResult) -> bytes:
        host = url.netloc.rpartition("@")[2]
        request = urllib.request.Request(
            urlunsplit(url._replace(netloc=host)), method="GET"
        )
        if url.password is not None:
            credentials = f"{unquote(url.username or '')}:{unquote(url.password)}"
            encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
            request.add_header("Authorization", "Basic " + encoded)

        start = time.monotonic()
        try:
            response = self._client.open(request)
        except HTTPError as exc:
            response = exc
        except (URLError, OSError, ValueError) as exc:
            raise ExternalReferenceError(f"do: {exc}") from exc

        try:
            status = _status_of(response)
            self._logger.debug(
                "Get url=%s status=%d duration=%.6fs",
                _redacted(url),
                status,
                time.monotonic() - start,
            )
            if status >= 299:
                raise ExternalReferenceError(
                    f"bad HTTP code {status} ({_status_text(status)})"
                )
            try:
                return bytes(response.read())
            except OSError as exc:
                raise ExternalReferenceError(f"read data: {exc}") from exc
        finally:
            close = getattr(response, "close", None)
            if callable(close):
                close()

    def _file_get(self, url: SplitResult) -> bytes:
        try:
            path = self._url_to_file_path(url)
        except Exception as exc:
            raise ExternalReferenceError(f"convert url to file path: {exc}") from exc
        return self._read_file(path)

    def get(self, location: str) -> bytes:
        """Fetch the contents at ``location``."""
        try:
            url = urlsplit(location)
        except ValueError as exc:
            raise ExternalReferenceError(str(exc), location=location) from exc

        scheme = url.scheme
        if scheme in ("http", "https"):
            fetch = self._http_get
        elif scheme in ("file", ""):
            fetch = self._file_get
        else:
            raise ExternalReferenceError(
                f'unsupported scheme "{scheme}"', location=location
            )

        try:
            return fetch(url)
        except Exception as exc:
            raise ExternalReferenceError(
                f"{scheme or 'file'}: {exc}", location=location
            ) from exc


def new_external_resolver(options: Optional[ExternalOptions] = None) -> DefaultExternalResolver:
    """Create a resolver for http(s) and file references."""
    return DefaultExternalResolver(options)