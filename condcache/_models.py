from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from condcache._exceptions import MalformedResponseError
from condcache._headers import ETAG, LAST_MODIFIED, Headers

__all__ = ("Request", "Response", "CacheEntry")


def _as_headers(value: Union[Headers, Mapping[str, Any]]) -> Headers:
    if isinstance(value, Headers):
        return value
    return Headers(value)


@dataclass
class Request:
    method: str
    url: str
    headers: Headers = field(default_factory=lambda: Headers({}))

    def __post_init__(self) -> None:
        self.headers = _as_headers(self.headers)


@dataclass
class Response:
    """
    The parts of a server response the cache cares about.

    `body` is whatever the caller decoded the payload into and is never
    inspected. `request` carries the canonical URL the response belongs to.
    """

    status_code: int
    headers: Headers = field(default_factory=lambda: Headers({}))
    body: Any = None
    request: Optional[Request] = None

    def __post_init__(self) -> None:
        self.headers = _as_headers(self.headers)

    @property
    def url(self) -> str:
        if self.request is None or not self.request.url:
            raise MalformedResponseError(
                f"Cannot compute the URL of a response without a request (status code {self.status_code})."
            )
        return self.request.url


@dataclass(frozen=True)
class CacheEntry:
    url: str
    headers: Headers
    body: Any = None
    request: Optional[Request] = None

    @property
    def etag(self) -> Optional[str]:
        return self.headers.get(ETAG)

    @property
    def last_modified(self) -> Optional[str]:
        return self.headers.get(LAST_MODIFIED)
