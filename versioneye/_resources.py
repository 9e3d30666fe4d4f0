from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar
from urllib.parse import quote

from ._decoders import PageDecoder, decode_list, decode_object
from ._exceptions import DecodeError
from ._models import Comment, OrganisationData, UserData
from ._pagination import Page, paginated
from ._transports import Transport


T = TypeVar("T")


def _segment(name: str) -> str:
    return quote(name, safe="")


def _get(transport: Transport, uri: str, decode: Callable[[bytes], T]) -> T:
    payload = transport.get(uri)
    try:
        return decode(payload)
    except DecodeError as exc:
        exc.uri = uri
        raise


class Comments:
    """The comments written by one user."""

    def __init__(self, transport: Transport, username: str) -> None:
        self._transport = transport
        self._username = username

    @property
    def locator(self) -> str:
        return f"/users/{_segment(self._username)}/comments"

    def paginated(self, *, max_pages: int | None = None) -> Page[Comment]:
        return paginated(
            self._transport,
            self.locator,
            PageDecoder(Comment.from_json),
            max_pages=max_pages,
        )


class User:
    def __init__(self, transport: Transport, username: str) -> None:
        self._transport = transport
        self._username = username

    @property
    def username(self) -> str:
        return self._username

    def about(self) -> UserData:
        uri = f"/users/{_segment(self._username)}"
        return _get(
            self._transport, uri, lambda body: decode_object(body, UserData.from_json)
        )

    def comments(self) -> Comments:
        return Comments(self._transport, self._username)


class Users:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def user(self, username: str) -> User:
        return User(self._transport, username)


class Organisation:
    def __init__(self, transport: Transport, name: str) -> None:
        self._transport = transport
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def about(self) -> OrganisationData:
        uri = f"/organisations/{_segment(self._name)}"
        return _get(
            self._transport,
            uri,
            lambda body: decode_object(body, OrganisationData.from_json),
        )


class Organisations:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def about(self) -> list[OrganisationData]:
        """The organisations the caller has access to."""
        return _get(
            self._transport,
            "/organisations",
            lambda body: decode_list(body, OrganisationData.from_json),
        )

    def organisation(self, name: str) -> Organisation:
        return Organisation(self._transport, name)


class VersionEye:
    """Entry point of the API.

    The transport is passed in explicitly; nothing here holds global state.

    >>> with HttpTransport("https://www.versioneye.com/api/v2") as transport:
    ...     api = VersionEye(transport)
    ...     for page in api.users().user("jdoe").comments().paginated():
    ...         print(len(page.fetch()))
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def users(self) -> Users:
        return Users(self._transport)

    def organisations(self) -> Organisations:
        return Organisations(self._transport)
