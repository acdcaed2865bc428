from __future__ import annotations

from typing import Any, Iterator, List, Mapping, MutableMapping, Optional, Union

__all__ = (
    "ETAG",
    "LAST_MODIFIED",
    "IF_NONE_MATCH",
    "IF_MODIFIED_SINCE",
    "VALIDATOR_HEADERS",
    "Headers",
)

# Response validators, looked up case-insensitively.
ETAG = "etag"
LAST_MODIFIED = "last-modified"

# Conditional request headers, emitted with this exact casing.
IF_NONE_MATCH = "If-None-Match"
IF_MODIFIED_SINCE = "If-Modified-Since"

VALIDATOR_HEADERS = (ETAG, LAST_MODIFIED)


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header mapping.

    Names are stored lower-cased, so `headers["ETag"]` and `headers["etag"]`
    refer to the same field. Repeated fields keep every value and are joined
    with ", " on access.
    """

    def __init__(self, headers: Mapping[str, Union[str, List[str]]]) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else v[:]) for k, v in headers.items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def copy(self) -> "Headers":
        return Headers(self._headers)

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers
