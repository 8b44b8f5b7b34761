"""Diagnostics returned from provider and resource operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator


class Severity(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"


class ErrorKind(str, Enum):
    """Classification of a diagnostic, used by hosts to pick a retry policy."""

    CONFIGURATION = "configuration"
    NOT_CONFIGURED = "not_configured"
    VALIDATION = "validation"
    REMOTE_CALL = "remote_call"
    NOT_FOUND = "not_found"
    PARTIAL_SUCCESS = "partial_success"


@dataclass(frozen=True)
class Diagnostic:
    """A single structured error or warning."""

    severity: Severity
    summary: str
    detail: str
    kind: ErrorKind | None = None
    attribute: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for a host status document."""
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "summary": self.summary,
            "detail": self.detail,
        }
        if self.kind is not None:
            data["kind"] = self.kind.value
        if self.attribute is not None:
            data["attribute"] = self.attribute
        return data

    def __str__(self) -> str:
        return f"{self.summary}: {self.detail}" if self.detail else self.summary


class Diagnostics:
    """Accumulator of zero or more diagnostics for one operation."""

    def __init__(self, items: Iterable[Diagnostic] | None = None) -> None:
        self._items: list[Diagnostic] = list(items or [])

    def add_error(
        self,
        summary: str,
        detail: str = "",
        kind: ErrorKind | None = None,
        attribute: str | None = None,
    ) -> None:
        """Record an error diagnostic."""
        self._items.append(Diagnostic(Severity.ERROR, summary, detail, kind, attribute))

    def add_warning(
        self,
        summary: str,
        detail: str = "",
        kind: ErrorKind | None = None,
        attribute: str | None = None,
    ) -> None:
        """Record a warning diagnostic."""
        self._items.append(Diagnostic(Severity.WARNING, summary, detail, kind, attribute))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self._items.extend(other)

    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.WARNING]

    def kinds(self) -> set[ErrorKind]:
        """Kinds of all error diagnostics."""
        return {d.kind for d in self.errors if d.kind is not None}

    def to_list(self) -> list[dict[str, Any]]:
        return [d.to_dict() for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
