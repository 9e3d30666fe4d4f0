from __future__ import annotations

import logging
import typing

import httpxr

from ._exceptions import StatusError, TransportError

logger = logging.getLogger("versioneye.transport")

DEFAULT_BASE_URL = "https://www.versioneye.com/api/v2"


class Transport(typing.Protocol):
    """Anything that can GET a URI and hand back the raw response body."""

    def get(self, uri: str) -> bytes: ...


class HttpTransport:
    """:class:`Transport` backed by an :class:`httpxr.Client`.

    Parameters
    ----------
    base_url:
        Prefix joined in front of every URI passed to :meth:`get`.
    client:
        An open client to send requests with.  When omitted, a client is
        created from ``timeout`` and ``headers`` and closed by :meth:`close`.
        A supplied client is left open.
    timeout:
        Request timeout for the owned client.
    headers:
        Default headers for the owned client.

    Examples
    --------
    >>> with HttpTransport("https://www.versioneye.com/api/v2") as transport:
    ...     body = transport.get("/users/jdoe")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpxr.Client | None = None,
        timeout: float | httpxr.Timeout | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        if client is None:
            kwargs: dict[str, typing.Any] = {"headers": headers or {}}
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = httpxr.Client(**kwargs)
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, uri: str) -> str:
        if not uri.startswith("/"):
            uri = "/" + uri
        return self._base_url + uri

    def get(self, uri: str) -> bytes:
        url = self.url_for(uri)
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
        except httpxr.RequestError as exc:
            raise TransportError(
                f"GET {url} failed: {exc}", uri=uri
            ) from exc

        if not response.is_success:
            raise StatusError(
                f"GET {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                uri=uri,
            )
        logger.debug(
            "GET %s -> %d (%d bytes)", url, response.status_code, len(response.content)
        )
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HttpTransport(base_url={self._base_url!r})"
