from __future__ import annotations

import logging
import typing

import httpxr
import pytest

import versioneye
from versioneye import HttpTransport

if typing.TYPE_CHECKING:  # pragma: no cover
    from conftest import MockServer

BASE_URL = "http://versioneye.test/api/v2"


class RaisingClient:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.closed = False

    def get(self, url: str) -> typing.Any:
        raise self.exc

    def close(self) -> None:
        self.closed = True


class TestHttpTransport:
    def test_get_returns_body(
        self, server: MockServer, http_transport: HttpTransport
    ) -> None:
        server.next(200, '{"fullname": "Jon Doe", "username": "jdoe"}')

        content = http_transport.get("/users/jdoe")

        assert content == b'{"fullname": "Jon Doe", "username": "jdoe"}'
        assert server.take() == "/users/jdoe"

    def test_uri_without_leading_slash(
        self, server: MockServer, http_transport: HttpTransport
    ) -> None:
        server.next(200, "[]")

        http_transport.get("organisations")

        assert server.take() == "/organisations"

    def test_base_url_trailing_slash_is_dropped(self) -> None:
        transport = HttpTransport(
            BASE_URL + "/",
            client=RaisingClient(httpxr.ConnectError("unused")),  # type: ignore[arg-type]
        )
        assert transport.base_url == BASE_URL
        assert transport.url_for("/users/jdoe") == BASE_URL + "/users/jdoe"

    @pytest.mark.parametrize("status_code", [301, 401, 404, 500, 503])
    def test_non_success_status(
        self, server: MockServer, http_transport: HttpTransport, status_code: int
    ) -> None:
        server.next(status_code, "{}")

        with pytest.raises(versioneye.StatusError) as info:
            http_transport.get("/users/jdoe/comments?page=1")

        assert info.value.status_code == status_code
        assert info.value.uri == "/users/jdoe/comments?page=1"
        assert isinstance(info.value, versioneye.TransportError)

    def test_request_error_becomes_transport_error(self) -> None:
        cause = httpxr.ConnectError("Connection refused")
        transport = HttpTransport(BASE_URL, client=RaisingClient(cause))  # type: ignore[arg-type]

        with pytest.raises(versioneye.TransportError) as info:
            transport.get("/users/jdoe")

        assert info.value.__cause__ is cause
        assert info.value.uri == "/users/jdoe"
        assert not isinstance(info.value, versioneye.StatusError)

    def test_timeout_becomes_transport_error(self) -> None:
        transport = HttpTransport(
            BASE_URL,
            client=RaisingClient(httpxr.ReadTimeout("Read operation timed out")),  # type: ignore[arg-type]
        )

        with pytest.raises(versioneye.TransportError):
            transport.get("/users/jdoe")

    def test_supplied_client_is_not_closed(self) -> None:
        client = RaisingClient(httpxr.ConnectError("unused"))

        with HttpTransport(BASE_URL, client=client):  # type: ignore[arg-type]
            pass

        assert client.closed is False

    def test_owned_client_is_closed(self) -> None:
        transport = HttpTransport(BASE_URL, timeout=5.0, headers={"X-Api-Key": "k"})

        with transport:
            pass

        assert transport._client.is_closed

    def test_logs_requests(
        self,
        server: MockServer,
        http_transport: HttpTransport,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        server.next(200, "[]")

        with caplog.at_level(logging.DEBUG, logger="versioneye.transport"):
            http_transport.get("/organisations")

        assert f"GET {BASE_URL}/organisations" in caplog.text

    def test_repr(self, http_transport: HttpTransport) -> None:
        assert repr(http_transport) == f"HttpTransport(base_url={BASE_URL!r})"

    def test_satisfies_transport_protocol(self, http_transport: HttpTransport) -> None:
        transport: versioneye.Transport = http_transport
        assert callable(transport.get)
