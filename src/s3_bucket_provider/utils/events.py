"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_BUCKET_CREATED,
    EVENT_REASON_BUCKET_DELETED,
    EVENT_REASON_BUCKET_MISSING,
    EVENT_REASON_BUCKET_UPDATED,
    EVENT_REASON_OPERATION_FAILED,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body (apiVersion, kind and metadata)
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_bucket_created(body: dict[str, Any], bucket_name: str) -> None:
    """Emit bucket created event."""
    emit_event(body, EVENT_REASON_BUCKET_CREATED, f"Bucket {bucket_name} created")


def emit_bucket_updated(body: dict[str, Any], bucket_name: str) -> None:
    """Emit bucket updated event."""
    emit_event(body, EVENT_REASON_BUCKET_UPDATED, f"Bucket {bucket_name} updated")


def emit_bucket_deleted(body: dict[str, Any], bucket_name: str) -> None:
    """Emit bucket deleted event."""
    emit_event(body, EVENT_REASON_BUCKET_DELETED, f"Bucket {bucket_name} deleted")


def emit_bucket_missing(body: dict[str, Any], bucket_name: str) -> None:
    """Emit bucket missing event."""
    emit_event(body, EVENT_REASON_BUCKET_MISSING, f"Bucket {bucket_name} no longer exists", type_="Warning")


def emit_operation_failed(body: dict[str, Any], message: str) -> None:
    """Emit operation failed event."""
    emit_event(body, EVENT_REASON_OPERATION_FAILED, message, type_="Warning")
