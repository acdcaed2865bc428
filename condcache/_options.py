from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

__all__ = ("RequestOptions", "GITHUB_API_URL", "GITHUB_V3_MEDIA_TYPE")

GITHUB_API_URL = "https://api.github.com"

# https://developer.github.com/v3/#current-version
GITHUB_V3_MEDIA_TYPE = "application/vnd.github.v3+json"

# Maximum page size supported by the API.
# https://developer.github.com/v3/#pagination
DEFAULT_PER_PAGE = 100


def _merge_defaults(overrides: Optional[Mapping[str, Any]], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(overrides or {})
    for key, value in defaults.items():
        if not any(key.lower() == existing.lower() for existing in merged):
            merged[key] = value
    return merged


@dataclass
class RequestOptions:
    """
    Defaults applied to every request made through a conditional client.

    Attributes:
    ----------
    method : str
        HTTP method used when the caller does not pick one.

        Default: "GET"

    base_url : str
        Prefix joined with the request path to build the full URL. The joined
        string, plus the serialized query, is the cache key.

        Default: "https://api.github.com"

    json : bool
        Decode response bodies as JSON. When False the body is kept as text.

        Default: True

    headers : dict[str, str]
        Headers sent with every request. Caller headers win on conflicts,
        compared case-insensitively.

        Default: {"Accept": "application/vnd.github.v3+json"}

    params : dict[str, Any]
        Query parameters sent with every request. Caller parameters come
        first and win on conflicts.

        Default: {"per_page": 100}

        Examples:
        --------
        >>> options = RequestOptions().merge(params={"page": 2})
        >>> options.params
        {'page': 2, 'per_page': 100}
    """

    method: str = "GET"
    base_url: str = GITHUB_API_URL
    json: bool = True
    headers: Dict[str, str] = field(default_factory=lambda: {"Accept": GITHUB_V3_MEDIA_TYPE})
    params: Dict[str, Any] = field(default_factory=lambda: {"per_page": DEFAULT_PER_PAGE})

    def merge(
        self,
        method: Optional[str] = None,
        base_url: Optional[str] = None,
        json: Optional[bool] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> "RequestOptions":
        """
        Returns a copy with the given overrides filled in from these defaults.
        """
        return replace(
            self,
            method=method.upper() if method is not None else self.method,
            base_url=base_url if base_url is not None else self.base_url,
            json=json if json is not None else self.json,
            headers=_merge_defaults(headers, self.headers),
            params=_merge_defaults(params, self.params),
        )
