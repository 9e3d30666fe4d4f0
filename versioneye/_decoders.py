from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from ._exceptions import DecodeError

T = TypeVar("T")

RecordFactory = Callable[[Any], T]


def _loads(payload: bytes) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Payload is not valid JSON: {exc}") from exc


def _build(factory: RecordFactory[T], record: Any) -> T:
    if not isinstance(record, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(record).__name__}", record=record
        )
    try:
        return factory(record)
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(f"Invalid record: {exc!r}", record=record) from exc


class PageResult(Sequence[T], Generic[T]):
    """The decoded contents of one page, in server order."""

    __slots__ = ("_items",)

    def __init__(self, items: Sequence[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[T]: ...

    def __getitem__(self, index: int | slice) -> T | Sequence[T]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageResult):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"PageResult(items={list(self._items)!r})"


class PageDecoder(Generic[T]):
    """Turns a JSON array payload into a :class:`PageResult`.

    Every element of the array is handed to ``factory``; the first record
    that cannot be built fails the whole page with :class:`DecodeError`.
    """

    def __init__(self, factory: RecordFactory[T]) -> None:
        self._factory = factory

    @property
    def factory(self) -> RecordFactory[T]:
        return self._factory

    def decode(self, payload: bytes) -> PageResult[T]:
        records = _loads(payload)
        if not isinstance(records, list):
            raise DecodeError(
                f"Expected a JSON array, got {type(records).__name__}",
                record=records,
            )
        return PageResult([_build(self._factory, record) for record in records])

    def __repr__(self) -> str:
        name = getattr(self._factory, "__qualname__", repr(self._factory))
        return f"PageDecoder({name})"


def decode_object(payload: bytes, factory: RecordFactory[T]) -> T:
    """Decode a payload holding a single JSON object."""
    return _build(factory, _loads(payload))


def decode_list(payload: bytes, factory: RecordFactory[T]) -> list[T]:
    """Decode a payload holding a JSON array of objects."""
    return list(PageDecoder(factory).decode(payload))
