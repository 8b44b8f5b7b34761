"""Resource record and the plan/state containers exchanged with the host."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any, Mapping

from .constants import TIMESTAMP_FORMAT
from .diagnostics import Diagnostics, ErrorKind
from .schema import BUCKET_SCHEMA, Schema


def normalize(value: str | None) -> str:
    """Strip every double quote from a string-encoded value."""
    return (value or "").replace('"', "")


def format_timestamp(moment: datetime) -> str:
    """Render a moment in the RFC 850 layout, in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Inverse of format_timestamp."""
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class BucketResourceModel:
    """Flat record persisted for one bucket resource."""

    name: str | None = None
    tags: str | None = None
    date: str | None = None
    last_updated: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> BucketResourceModel:
        return cls(
            name=raw.get("name"),
            tags=raw.get("tags"),
            date=raw.get("date"),
            last_updated=raw.get("last_updated"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def normalized(self) -> BucketResourceModel:
        """Copy with quote characters stripped from name and tags."""
        return replace(self, name=normalize(self.name), tags=normalize(self.tags))

    def stamped(self, moment: datetime) -> BucketResourceModel:
        """Copy with date and last_updated set to the same instant."""
        timestamp = format_timestamp(moment)
        return replace(self, date=timestamp, last_updated=timestamp)


class StateContainer:
    """Raw record as stored by the host, validated on every get.

    A container holding None is null: the resource does not exist from the
    host's point of view.
    """

    def __init__(self, raw: Mapping[str, Any] | None = None, schema: Schema = BUCKET_SCHEMA) -> None:
        self._raw = dict(raw) if raw is not None else None
        self.schema = schema

    @property
    def raw(self) -> dict[str, Any] | None:
        return dict(self._raw) if self._raw is not None else None

    @property
    def is_null(self) -> bool:
        return self._raw is None

    def get(self) -> tuple[BucketResourceModel | None, Diagnostics]:
        """Deserialize the stored record into a BucketResourceModel."""
        if self._raw is None:
            diags = Diagnostics()
            diags.add_error(
                "Missing resource data",
                f"No {type(self).__name__.lower()} data was provided for this operation.",
                kind=ErrorKind.VALIDATION,
            )
            return None, diags

        diags = self.schema.validate(self._raw)
        if diags.has_error():
            return None, diags
        return BucketResourceModel.from_dict(self._raw), diags

    def set(self, model: BucketResourceModel | None) -> Diagnostics:
        """Replace the stored record; None marks the resource as removed."""
        diags = Diagnostics()
        if model is None:
            self._raw = None
            return diags

        raw = model.to_dict()
        diags.extend(self.schema.validate(raw))
        if not diags.has_error():
            self._raw = raw
        return diags

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateContainer):
            return NotImplemented
        return self._raw == other._raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"


class Plan(StateContainer):
    """Desired-state record proposed by the host for create and update."""


class State(StateContainer):
    """Last persisted record, passed to read, update and delete."""
