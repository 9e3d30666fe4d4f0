from __future__ import annotations

import dataclasses
from typing import Any

from ._exceptions import DecodeError


def _required_str(record: Any, key: str) -> str:
    if not isinstance(record, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(record).__name__}", record=record
        )
    if key not in record:
        raise DecodeError(f"Missing required field {key!r}", record=record)
    value = record[key]
    if not isinstance(value, str):
        raise DecodeError(
            f"Field {key!r} must be a string, got {type(value).__name__}",
            record=record,
        )
    return value


def _optional_str(record: dict[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(
            f"Field {key!r} must be a string, got {type(value).__name__}",
            record=record,
        )
    return value


@dataclasses.dataclass(frozen=True)
class Comment:
    """A comment a user left on a product."""

    id: str
    text: str | None = None

    @classmethod
    def from_json(cls, record: Any) -> Comment:
        return cls(
            id=_required_str(record, "id"),
            text=_optional_str(record, "comment"),
        )


@dataclasses.dataclass(frozen=True)
class UserData:
    full_name: str
    username: str

    @classmethod
    def from_json(cls, record: Any) -> UserData:
        return cls(
            full_name=_required_str(record, "fullname"),
            username=_required_str(record, "username"),
        )


@dataclasses.dataclass(frozen=True)
class OrganisationData:
    name: str
    company: str | None = None

    @classmethod
    def from_json(cls, record: Any) -> OrganisationData:
        return cls(
            name=_required_str(record, "name"),
            company=_optional_str(record, "company"),
        )
