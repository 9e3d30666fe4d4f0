"""
Page-number pagination over a collection endpoint.

A collection is addressed by a *locator* (e.g. ``/users/jdoe/comments``);
page ``n`` of it lives at ``<locator>?page=n``.  An empty JSON array is the
only end-of-collection signal.

* :class:`Page`: one addressable page; ``fetch()`` hits the network
* :class:`PageIterator`: forward-only cursor producing :class:`Page` objects
* :func:`paginated`: the page-1 root of a collection

A :class:`Page` is also iterable: ``iter(page)`` starts a fresh, independent
cursor at that page, so the same root can be traversed any number of times.

Termination is decided by a lookahead fetch: before a page is handed out, the
cursor fetches it itself and stops if it is empty.  The caller's own
:meth:`Page.fetch` is a second, real request for the same page; nothing is
cached between the two.

Examples
--------
>>> root = paginated(transport, "/users/jdoe/comments", PageDecoder(Comment.from_json))
>>> first = root.fetch()                 # GET /users/jdoe/comments?page=1
>>> for page in root:                    # pages 1, 2, ... until an empty one
...     for comment in page.fetch():
...         print(comment.id)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

from ._decoders import PageDecoder, PageResult
from ._exceptions import DecodeError
from ._transports import Transport

logger = logging.getLogger("versioneye.pagination")

T = TypeVar("T")


def _page_uri(locator: str, number: int) -> str:
    separator = "&" if "?" in locator else "?"
    return f"{locator}{separator}page={number}"


class Page(Generic[T]):
    """Page ``number`` of the collection at ``locator``."""

    __slots__ = ("_transport", "_locator", "_decoder", "_number", "_max_pages")

    def __init__(
        self,
        transport: Transport,
        locator: str,
        decoder: PageDecoder[T],
        number: int = 1,
        *,
        max_pages: int | None = None,
    ) -> None:
        if number < 1:
            raise ValueError(f"Page numbers start at 1, got {number}")
        self._transport = transport
        self._locator = locator
        self._decoder = decoder
        self._number = number
        self._max_pages = max_pages

    @property
    def locator(self) -> str:
        return self._locator

    @property
    def number(self) -> int:
        return self._number

    @property
    def uri(self) -> str:
        return _page_uri(self._locator, self._number)

    def fetch(self) -> PageResult[T]:
        """GET this page and decode it.  Every call is a new request."""
        uri = self.uri
        payload = self._transport.get(uri)
        try:
            return self._decoder.decode(payload)
        except DecodeError as exc:
            exc.uri = uri
            raise

    def with_number(self, number: int) -> Page[T]:
        return Page(
            self._transport,
            self._locator,
            self._decoder,
            number,
            max_pages=self._max_pages,
        )

    def next_page(self) -> Page[T]:
        return self.with_number(self._number + 1)

    def pages(self, *, max_pages: int | None = None) -> PageIterator[T]:
        """Start a new cursor at this page."""
        return PageIterator(self, max_pages=max_pages)

    def __iter__(self) -> Iterator[Page[T]]:
        return self.pages(max_pages=self._max_pages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return (self._locator, self._number) == (other._locator, other._number)

    def __hash__(self) -> int:
        return hash((self._locator, self._number))

    def __repr__(self) -> str:
        return f"Page(locator={self._locator!r}, number={self._number})"


class PageIterator(Generic[T]):
    """Forward-only cursor over the non-empty pages of a collection.

    Not safe to share between threads.  Independent cursors over the same
    collection share no state.
    """

    def __init__(self, start: Page[T], *, max_pages: int | None = None) -> None:
        self._start = start
        self._max_pages = max_pages
        self._pages_yielded = 0
        self.current_number = start.number
        self.exhausted = False
        #: Number of lookahead requests issued so far.
        self.pages_fetched = 0

    def __iter__(self) -> PageIterator[T]:
        return self

    def __next__(self) -> Page[T]:
        page, _ = self._advance()
        return page

    def _advance(self) -> tuple[Page[T], PageResult[T]]:
        if self.exhausted:
            raise StopIteration
        if self._max_pages is not None and self._pages_yielded >= self._max_pages:
            logger.debug(
                "Stopping %s after max_pages=%d", self._start.locator, self._max_pages
            )
            self.exhausted = True
            raise StopIteration

        page = self._start.with_number(self.current_number)
        self.pages_fetched += 1
        logger.debug("Looking ahead at %s", page.uri)
        try:
            result = page.fetch()
        except Exception:
            self.exhausted = True
            raise

        if result.is_empty:
            logger.debug("%s is empty, pagination finished", page.uri)
            self.exhausted = True
            raise StopIteration

        self.current_number += 1
        self._pages_yielded += 1
        return page, result

    def collect(self) -> list[Page[T]]:
        """Drain the remaining pages into a list."""
        return list(self)

    def items(self) -> Iterator[T]:
        """Yield the items of every remaining page, in order.

        Uses the lookahead result directly, so each page is requested once.
        """
        while True:
            try:
                _, result = self._advance()
            except StopIteration:
                return
            yield from result

    def __repr__(self) -> str:
        return (
            f"PageIterator(locator={self._start.locator!r}, "
            f"current_number={self.current_number}, exhausted={self.exhausted})"
        )


def paginated(
    transport: Transport,
    locator: str,
    decoder: PageDecoder[T],
    *,
    max_pages: int | None = None,
) -> Page[T]:
    """Return page 1 of ``locator``; iterate it to walk the whole collection."""
    return Page(transport, locator, decoder, 1, max_pages=max_pages)
