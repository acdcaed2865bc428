from __future__ import annotations

import typing as tp

import httpx

from condcache._headers import Headers
from condcache._models import Request, Response
from condcache._options import RequestOptions


def get_url_from_request_options(options: RequestOptions, url: str) -> str:
    """
    Build the canonical URL of a request.

    The result is `base_url + url`, followed by the query string when there are
    parameters. Parameters keep the order they were given in.

    Example:
        ```
        options = RequestOptions(params={"page": 1})
        get_url_from_request_options(options, "/issues")
        # 'https://api.github.com/issues?page=1'
        ```
    """
    result = (options.base_url or "") + url

    if options.params:
        result += "?" + str(httpx.QueryParams(options.params))

    return result


def get_response_url(response: Response) -> str:
    return response.url


def headers_from_httpx(headers: httpx.Headers) -> Headers:
    return Headers({key: value for key, value in headers.items()})


def describe_response(
    response: httpx.Response,
    url: str,
    body: tp.Any = None,
) -> Response:
    """
    Convert an httpx response into the descriptor understood by the cache.

    `url` must be the canonical URL the request was built from, not the one
    httpx reports, since httpx may re-encode it.
    """
    return Response(
        status_code=response.status_code,
        headers=headers_from_httpx(response.headers),
        body=body,
        request=Request(
            method=response.request.method,
            url=url,
            headers=headers_from_httpx(response.request.headers),
        ),
    )


def decode_body(response: httpx.Response, json: bool) -> tp.Any:
    if not json:
        return response.text
    if not response.content:
        return None
    return response.json()
