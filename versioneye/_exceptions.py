from __future__ import annotations

import typing


class VersionEyeError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, *, uri: str | None = None) -> None:
        super().__init__(message)
        self._uri = uri

    @property
    def uri(self) -> str:
        if self._uri is None:
            raise RuntimeError("The .uri property has not been set.")
        return self._uri

    @uri.setter
    def uri(self, uri: str) -> None:
        self._uri = uri


class TransportError(VersionEyeError):
    """The service could not be reached."""


class StatusError(TransportError):
    """The service answered with a non-success HTTP status."""

    def __init__(
        self, message: str, *, status_code: int, uri: str | None = None
    ) -> None:
        super().__init__(message, uri=uri)
        self.status_code = status_code


class DecodeError(VersionEyeError):
    """A payload did not have the expected JSON shape."""

    def __init__(
        self,
        message: str,
        *,
        uri: str | None = None,
        record: typing.Any = None,
    ) -> None:
        super().__init__(message, uri=uri)
        self.record = record
