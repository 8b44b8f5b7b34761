"""Main entry point: drives the bucket resource from a Kubernetes custom resource."""

from __future__ import annotations

import logging
import os
from typing import Any

import kopf

from . import logging as structured_logging
from .config import ProviderConfig
from .constants import API_GROUP_VERSION, KIND_BUCKET, OP_CREATE, OP_DELETE, OP_READ, OP_UPDATE
from .diagnostics import ErrorKind
from .health import start_metrics_server
from .provider import BucketProvider
from .resources.base import OperationResult
from .resources.bucket import BucketResource
from .state import Plan, State
from .tracing import initialize_tracing
from .utils.conditions import set_ready_condition
from .utils.events import (
    emit_bucket_created,
    emit_bucket_deleted,
    emit_bucket_missing,
    emit_bucket_updated,
    emit_operation_failed,
)

logger = logging.getLogger(__name__)

DRIFT_CHECK_INTERVAL_SECONDS = int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300"))
RETRY_DELAY_SECONDS = 60

# Retrying cannot fix these
PERMANENT_ERROR_KINDS = {ErrorKind.CONFIGURATION, ErrorKind.NOT_CONFIGURED, ErrorKind.VALIDATION}

provider = BucketProvider()


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator and the S3 client."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Keep kopf's bookkeeping out of status, which holds the resource state
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = logging.WARNING
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    start_metrics_server(int(os.getenv("METRICS_PORT", "8080")))

    diags = provider.configure(ProviderConfig.from_env())
    if diags.has_error():
        raise kopf.PermanentError("; ".join(str(d) for d in diags.errors))


def plan_from_spec(spec: dict[str, Any]) -> Plan:
    """Build the plan for a Bucket custom resource."""
    return Plan({"name": spec.get("name"), "tags": spec.get("tags")})


def prior_state(status: dict[str, Any]) -> State:
    """State persisted by a previous operation, null if none."""
    return State(status.get("state"))


def new_resource() -> BucketResource:
    resource, diags = provider.new_resource()
    if diags.has_error():
        raise kopf.PermanentError("; ".join(str(d) for d in diags.errors))
    return resource


def apply_result(
    body: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    result: OperationResult,
    operation: str,
) -> None:
    """Write an operation result into the status patch.

    Raises:
        kopf.PermanentError: For configuration and validation errors
        kopf.TemporaryError: For remote failures, so kopf retries
    """
    if result.succeeded:
        message = f"Bucket {operation} succeeded"
    else:
        message = "; ".join(str(d) for d in result.diagnostics.errors)

    patch.status["state"] = result.state.raw
    patch.status["diagnostics"] = result.diagnostics.to_list()
    patch.status["conditions"] = set_ready_condition(
        list(status.get("conditions", [])),
        result.succeeded and not result.state.is_null,
        message,
        reason=None if result.succeeded else "OperationFailed",
        observed_generation=meta.get("generation"),
    )

    if result.succeeded:
        return

    emit_operation_failed(body, message)
    if result.diagnostics.kinds() & PERMANENT_ERROR_KINDS:
        raise kopf.PermanentError(message)
    raise kopf.TemporaryError(message, delay=RETRY_DELAY_SECONDS)


@kopf.on.create(API_GROUP_VERSION, KIND_BUCKET)
def handle_bucket_create(
    body: dict[str, Any],
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **_: Any,
) -> None:
    """Handle Bucket resource creation."""
    resource = new_resource()
    prior = prior_state(status)

    if not prior.is_null:
        # A retried create after a failed rollback; the bucket exists, retag it
        result = resource.update(plan_from_spec(spec), prior)
        apply_result(body, meta, status, patch, result, OP_UPDATE)
        emit_bucket_updated(body, result.record.name)
        return

    result = resource.create(plan_from_spec(spec))
    apply_result(body, meta, status, patch, result, OP_CREATE)
    emit_bucket_created(body, result.record.name)


@kopf.on.update(API_GROUP_VERSION, KIND_BUCKET, field="spec")
def handle_bucket_update(
    body: dict[str, Any],
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **_: Any,
) -> None:
    """Handle Bucket spec changes."""
    resource = new_resource()
    prior = prior_state(status)

    if prior.is_null:
        # The bucket was never created; a spec change retries creation
        result = resource.create(plan_from_spec(spec))
        apply_result(body, meta, status, patch, result, OP_CREATE)
        emit_bucket_created(body, result.record.name)
        return

    result = resource.update(plan_from_spec(spec), prior)
    apply_result(body, meta, status, patch, result, OP_UPDATE)
    emit_bucket_updated(body, result.record.name)


@kopf.on.resume(API_GROUP_VERSION, KIND_BUCKET)
@kopf.timer(API_GROUP_VERSION, KIND_BUCKET, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_bucket_read(
    body: dict[str, Any],
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **_: Any,
) -> None:
    """Refresh a Bucket, recreating it when it was removed from state."""
    prior = prior_state(status)
    if prior.is_null:
        return

    resource = new_resource()
    result = resource.read(prior)

    if result.succeeded and result.state.is_null:
        emit_bucket_missing(body, prior.raw.get("name") or meta.get("name", "unknown"))
        result = resource.create(plan_from_spec(spec))
        apply_result(body, meta, status, patch, result, OP_CREATE)
        emit_bucket_created(body, result.record.name)
        return

    apply_result(body, meta, status, patch, result, OP_READ)


@kopf.on.delete(API_GROUP_VERSION, KIND_BUCKET)
def handle_bucket_delete(
    body: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **_: Any,
) -> None:
    """Handle Bucket resource deletion."""
    prior = prior_state(status)
    if prior.is_null:
        logger.info(f"Bucket {meta.get('name', 'unknown')} has no state, nothing to delete")
        return

    bucket_name = prior.raw.get("name")
    result = new_resource().delete(prior)
    apply_result(body, meta, status, patch, result, OP_DELETE)
    emit_bucket_deleted(body, bucket_name)


def run() -> None:
    """Run the operator against the whole cluster."""
    kopf.run(clusterwide=True)
