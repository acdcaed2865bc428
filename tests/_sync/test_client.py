import typing as tp

import httpx
import pytest
from inline_snapshot import snapshot

from condcache import ConditionalClient, ConditionalCache, RequestOptions

ISSUES_URL = "https://api.github.com/repos/foo/bar/issues?per_page=100"


class MockServer:
    def __init__(self, responses: tp.List[httpx.Response]) -> None:
        self.responses = responses
        self.requests: tp.List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise RuntimeError("No more mocked responses available")
        return self.responses.pop(0)


def make_client(server: MockServer, cache: tp.Optional[ConditionalCache] = None) -> ConditionalClient:
    return ConditionalClient(
        cache=cache,
        client=httpx.Client(transport=httpx.MockTransport(server.handler)),
    )



def test_default_request_options():
    server = MockServer([httpx.Response(200, json=[])])

    with make_client(server) as client:
        response, body = client.get("/repos/foo/bar/issues")

    request = server.requests[0]
    assert request.method == "GET"
    assert str(request.url) == ISSUES_URL
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert "If-None-Match" not in request.headers
    assert response.status_code == 200
    assert body == []



def test_not_modified_uses_cached_body(caplog: pytest.LogCaptureFixture):
    server = MockServer(
        [
            httpx.Response(200, headers={"ETag": '"abc"'}, json={"n": 1}),
            httpx.Response(304, headers={"ETag": '"abc"'}),
        ]
    )

    with make_client(server) as client:
        with caplog.at_level("DEBUG", logger="condcache"):
            client.get("/repos/foo/bar/issues")
            response, body = client.get("/repos/foo/bar/issues")

    assert response.status_code == 304
    assert body == {"n": 1}
    assert server.requests[1].headers["If-None-Match"] == '"abc"'
    assert caplog.messages == snapshot(
        [
            "Sending GET request to https://api.github.com/repos/foo/bar/issues?per_page=100",
            "Storing the response for https://api.github.com/repos/foo/bar/issues?per_page=100 in cache.",
            "Sending GET request to https://api.github.com/repos/foo/bar/issues?per_page=100",
            "Using the cached body for https://api.github.com/repos/foo/bar/issues?per_page=100 "
            "since the server answered with 304.",
        ]
    )



def test_modified_response_replaces_entry():
    server = MockServer(
        [
            httpx.Response(200, headers={"Last-Modified": "Thu, 05 Jul 2012 15:31:30 GMT"}, json={"n": 1}),
            httpx.Response(200, headers={"Last-Modified": "Fri, 06 Jul 2012 10:00:00 GMT"}, json={"n": 2}),
            httpx.Response(304),
        ]
    )
    cache = ConditionalCache()

    with make_client(server, cache=cache) as client:
        client.get("/repos/foo/bar/issues")
        _, second = client.get("/repos/foo/bar/issues")
        _, third = client.get("/repos/foo/bar/issues")

    assert second == {"n": 2}
    assert third == {"n": 2}
    assert server.requests[1].headers["If-Modified-Since"] == "Thu, 05 Jul 2012 15:31:30 GMT"
    assert server.requests[2].headers["If-Modified-Since"] == "Fri, 06 Jul 2012 10:00:00 GMT"
    assert len(cache) == 1



def test_response_without_validators_is_not_cached():
    server = MockServer(
        [
            httpx.Response(200, json={"n": 1}),
            httpx.Response(200, json={"n": 2}),
        ]
    )
    cache = ConditionalCache()

    with make_client(server, cache=cache) as client:
        client.get("/user")
        _, body = client.get("/user")

    assert body == {"n": 2}
    assert "If-None-Match" not in server.requests[1].headers
    assert "If-Modified-Since" not in server.requests[1].headers
    assert len(cache) == 0



def test_not_modified_without_entry_uses_network_body():
    server = MockServer([httpx.Response(304)])

    with make_client(server) as client:
        response, body = client.get("/user")

    assert response.status_code == 304
    assert body is None



def test_query_parameters_are_separate_entries():
    server = MockServer(
        [
            httpx.Response(200, headers={"ETag": '"page-1"'}, json=[1]),
            httpx.Response(200, headers={"ETag": '"page-2"'}, json=[2]),
        ]
    )
    cache = ConditionalCache()

    with make_client(server, cache=cache) as client:
        client.get("/issues", params={"page": 1})
        client.get("/issues", params={"page": 2})

    assert "If-None-Match" not in server.requests[1].headers
    assert cache.headers_for("https://api.github.com/issues?page=1&per_page=100") == {"If-None-Match": '"page-1"'}
    assert cache.headers_for("https://api.github.com/issues?page=2&per_page=100") == {"If-None-Match": '"page-2"'}



def test_clear_cache_between_sessions():
    server = MockServer(
        [
            httpx.Response(200, headers={"ETag": '"abc"'}, json={"n": 1}),
            httpx.Response(200, headers={"ETag": '"abc"'}, json={"n": 1}),
        ]
    )

    with make_client(server) as client:
        client.get("/user")
        client.cache.clear()
        client.get("/user")

    assert "If-None-Match" not in server.requests[1].headers



def test_caller_overrides():
    server = MockServer([httpx.Response(200, text="plain text")])
    options = RequestOptions(base_url="https://github.example.com/api/v3", json=False, params={})

    with ConditionalClient(
        client=httpx.Client(transport=httpx.MockTransport(server.handler)),
        options=options,
    ) as client:
        _, body = client.request(
            "/markdown",
            method="post",
            headers={"Authorization": "token secret"},
        )

    request = server.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://github.example.com/api/v3/markdown"
    assert request.headers["Authorization"] == "token secret"
    assert body == "plain text"



def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    cache = ConditionalCache()

    with ConditionalClient(
        cache=cache,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    ) as client:
        with pytest.raises(httpx.ConnectError):
            client.get("/user")

    assert len(cache) == 0



def test_not_modified_for_caller_validator_is_not_cached():
    server = MockServer(
        [
            httpx.Response(304, headers={"ETag": '"abc"'}),
            httpx.Response(200, headers={"ETag": '"def"'}, json={"n": 2}),
        ]
    )
    cache = ConditionalCache()

    with make_client(server, cache=cache) as client:
        response, body = client.get("/user", headers={"If-None-Match": '"abc"'})

        assert response.status_code == 304
        assert body is None
        assert cache.lookup("https://api.github.com/user?per_page=100") is None

        _, body = client.get("/user")

    assert "If-None-Match" not in server.requests[1].headers
    assert body == {"n": 2}
