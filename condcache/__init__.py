from condcache._async._client import AsyncConditionalClient as AsyncConditionalClient
from condcache._cache import ConditionalCache as ConditionalCache
from condcache._exceptions import CacheError as CacheError, MalformedResponseError as MalformedResponseError
from condcache._headers import Headers as Headers
from condcache._models import CacheEntry as CacheEntry, Request as Request, Response as Response
from condcache._options import RequestOptions as RequestOptions
from condcache._sync._client import ConditionalClient as ConditionalClient
from condcache._utils import (
    get_response_url as get_response_url,
    get_url_from_request_options as get_url_from_request_options,
)

__all__ = (
    # Cache
    "ConditionalCache",
    "CacheEntry",
    ## Models
    "Request",
    "Response",
    ## Headers
    "Headers",
    ## Errors
    "CacheError",
    "MalformedResponseError",
    # Clients
    "AsyncConditionalClient",
    "ConditionalClient",
    "RequestOptions",
    ## URLs
    "get_url_from_request_options",
    "get_response_url",
)
