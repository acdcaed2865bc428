from __future__ import annotations

import logging
import types
import typing as tp

import httpx

from condcache._cache import ConditionalCache
from condcache._options import RequestOptions
from condcache._utils import decode_body, describe_response, get_url_from_request_options

if tp.TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

__all__ = ("ConditionalClient",)

logger = logging.getLogger("condcache.client")


class ConditionalClient:
    """
    Issues requests through httpx, revalidating cached bodies with the server.

    :param cache: Cache holding previously validated responses, defaults to a new empty cache
    :type cache: tp.Optional[ConditionalCache], optional
    :param client: httpx client that performs the network calls, defaults to None
    :type client: tp.Optional[httpx.Client], optional
    :param options: Defaults applied to every request, defaults to None
    :type options: tp.Optional[RequestOptions], optional
    """

    def __init__(
        self,
        cache: tp.Optional[ConditionalCache] = None,
        client: tp.Optional[httpx.Client] = None,
        options: tp.Optional[RequestOptions] = None,
    ) -> None:
        self.cache = cache if cache is not None else ConditionalCache()
        self.options = options if options is not None else RequestOptions()
        self._client = client if client is not None else httpx.Client()

    def request(
        self,
        url: str,
        method: tp.Optional[str] = None,
        base_url: tp.Optional[str] = None,
        json: tp.Optional[bool] = None,
        headers: tp.Optional[tp.Mapping[str, str]] = None,
        params: tp.Optional[tp.Mapping[str, tp.Any]] = None,
    ) -> tp.Tuple[httpx.Response, tp.Any]:
        """
        Sends a request and returns the response together with its body.

        When the server answers 304 for a URL that is cached, the body is the
        cached one; otherwise it is decoded from the network response.

        :param url: Path appended to the base URL
        :type url: str
        :return: The httpx response and the body to use
        :rtype: tp.Tuple[httpx.Response, tp.Any]
        """
        options = self.options.merge(
            method=method,
            base_url=base_url,
            json=json,
            headers=headers,
            params=params,
        )
        full_url = get_url_from_request_options(options, url)

        request_headers = httpx.Headers(options.headers)
        request_headers.update(self.cache.headers_for(full_url))

        logger.debug(f"Sending {options.method} request to {full_url}")
        response = self._client.request(options.method, full_url, headers=request_headers)

        described = describe_response(response, url=full_url)

        if self.cache.is_hit(described):
            entry = self.cache.lookup(full_url)
            if entry is not None:
                return response, entry.body

        described.body = decode_body(response, options.json)
        self.cache.save(described)

        return response, described.body

    def get(
        self,
        url: str,
        headers: tp.Optional[tp.Mapping[str, str]] = None,
        params: tp.Optional[tp.Mapping[str, tp.Any]] = None,
    ) -> tp.Tuple[httpx.Response, tp.Any]:
        return self.request(url, method="GET", headers=headers, params=params)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Self":
        return self

    def __exit__(
        self,
        exc_type: tp.Optional[tp.Type[BaseException]] = None,
        exc_value: tp.Optional[BaseException] = None,
        traceback: tp.Optional[types.TracebackType] = None,
    ) -> None:
        self.close()
