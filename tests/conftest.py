from __future__ import annotations

import collections
import pathlib
import typing

import httpxr
import pytest

import versioneye

FIXTURES = pathlib.Path(__file__).parent / "fixtures"

BASE_URL = "http://versioneye.test/api/v2"


def read_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


# ---------------------------------------------------------------------------
# In-memory transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Serves canned bodies per URI and records every ``get``.

    A value may be ``bytes`` or an exception instance, which is raised.  A
    list of values is consumed one element per call, the last one repeating.
    """

    def __init__(self, routes: dict[str, typing.Any] | None = None) -> None:
        self.routes: dict[str, typing.Any] = dict(routes or {})
        self.calls: list[str] = []

    def get(self, uri: str) -> bytes:
        self.calls.append(uri)
        if uri not in self.routes:
            raise versioneye.StatusError(
                f"GET {uri} returned HTTP 404", status_code=404, uri=uri
            )
        answer = self.routes[uri]
        if isinstance(answer, list):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if isinstance(answer, BaseException):
            raise answer
        return answer


# ---------------------------------------------------------------------------
# httpxr mock server with a request log
# ---------------------------------------------------------------------------


class MockServer:
    """Answers requests in the order they were queued and keeps a request log.

    Used as an ``httpxr.MockTransport`` handler.
    """

    def __init__(self) -> None:
        self._answers: collections.deque[tuple[int, bytes]] = collections.deque()
        self.requests: list[httpxr.Request] = []

    def next(self, status_code: int, body: bytes | str) -> MockServer:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._answers.append((status_code, body))
        return self

    def __call__(self, request: httpxr.Request) -> httpxr.Response:
        self.requests.append(request)
        if not self._answers:
            return httpxr.Response(500, text="No answer queued")
        status_code, body = self._answers.popleft()
        return httpxr.Response(
            status_code,
            content=body,
            headers={"content-type": "application/json"},
        )

    def take(self) -> str:
        """Pop the oldest logged request and return its URL relative to the API root."""
        url = str(self.requests.pop(0).url)
        assert url.startswith(BASE_URL), url
        return url[len(BASE_URL) :]


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def server() -> MockServer:
    return MockServer()


@pytest.fixture
def http_transport(server: MockServer) -> typing.Iterator[versioneye.HttpTransport]:
    client = httpxr.Client(transport=httpxr.MockTransport(server))
    transport = versioneye.HttpTransport(BASE_URL, client=client)
    yield transport
    client.close()


@pytest.fixture
def comments_server(server: MockServer) -> MockServer:
    """Three pages of two comments each, every page answered twice, then ``[]``."""
    for number in (1, 2, 3):
        body = read_fixture(f"commentspage{number}.json")
        server.next(200, body).next(200, body)
    return server.next(200, read_fixture("commentspage4.json"))
