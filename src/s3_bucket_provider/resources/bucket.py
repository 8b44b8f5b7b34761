"""Bucket resource: lifecycle of an S3 bucket and its single tag."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from botocore.exceptions import BotoCoreError, ClientError

from .. import metrics
from ..constants import (
    KIND_BUCKET,
    MISSING_BUCKET_ERROR_CODES,
    OP_CREATE,
    OP_DELETE,
    OP_READ,
    OP_UPDATE,
    RESOURCE_TYPE_SUFFIX,
    TAG_KEY,
)
from ..diagnostics import Diagnostics, ErrorKind
from ..schema import BUCKET_SCHEMA, Schema
from ..services.aws.client import AWSProvider
from ..services.s3.base import S3Provider
from ..state import BucketResourceModel, Plan, State, normalize
from ..utils.errors import client_error_code, sanitize_exception
from .base import BaseResource, OperationResult

REMOTE_ERRORS = (ClientError, BotoCoreError)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _name_of(container: Plan | State | None) -> str:
    raw = container.raw if container is not None else None
    return normalize((raw or {}).get("name")) or "unknown"


class BucketResource(BaseResource):
    """Manages one S3 bucket and the tag stored under TAG_KEY.

    Every lifecycle method requires a prior successful configure(); without a
    client it returns a NOT_CONFIGURED error instead of touching the remote
    side. Remote failures never raise out of a lifecycle method.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        remove_missing_on_read: bool = False,
    ):
        """Initialize bucket resource.

        Args:
            clock: Source of the current time for date/last_updated
            remove_missing_on_read: Drop the state of a bucket deleted out of
                band instead of reporting an error
        """
        super().__init__(KIND_BUCKET)
        self.client: S3Provider | None = None
        self.clock = clock
        self.remove_missing_on_read = remove_missing_on_read

    def metadata(self, provider_type_name: str) -> str:
        """Return the resource type name."""
        return provider_type_name + RESOURCE_TYPE_SUFFIX

    def schema(self) -> Schema:
        return BUCKET_SCHEMA

    def configure(self, provider_data: Any) -> Diagnostics:
        """Store the client configured by the provider.

        None is accepted and ignored: hosts may configure resources before the
        provider itself is configured.
        """
        diags = Diagnostics()
        if provider_data is None:
            return diags

        if not isinstance(provider_data, AWSProvider):
            diags.add_error(
                "Unexpected Resource Configure Type",
                f"Expected AWSProvider, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
                kind=ErrorKind.CONFIGURATION,
            )
            return diags

        self.client = provider_data
        return diags

    def create(self, plan: Plan) -> OperationResult:
        """Create the bucket, tag it, and return the new state."""
        return self.run_operation(OP_CREATE, _name_of(plan), lambda: self._create(plan))

    def read(self, state: State) -> OperationResult:
        """Confirm the bucket still exists and return the unchanged state."""
        return self.run_operation(OP_READ, _name_of(state), lambda: self._read(state))

    def update(self, plan: Plan, state: State | None = None) -> OperationResult:
        """Replace the bucket tag and return the updated state."""
        return self.run_operation(OP_UPDATE, _name_of(plan), lambda: self._update(plan, state))

    def delete(self, state: State) -> OperationResult:
        """Delete the bucket; the resulting state is null on success."""
        return self.run_operation(OP_DELETE, _name_of(state), lambda: self._delete(state))

    def _create(self, plan: Plan) -> OperationResult:
        model, diags = plan.get()
        if model is None:
            return OperationResult(State(), diags)
        if self.client is None:
            self.not_configured(diags)
            return OperationResult(State(), diags)

        model = model.normalized()
        bucket_name = model.name

        try:
            self.client.create_bucket(bucket_name)
        except REMOTE_ERRORS as e:
            metrics.bucket_operations_total.labels(operation="create", result="failed").inc()
            diags.add_error(
                "Error creating bucket",
                f"Could not create bucket {bucket_name}, unexpected error: {sanitize_exception(e)}",
                kind=ErrorKind.REMOTE_CALL,
            )
            return OperationResult(State(), diags)

        try:
            self.client.set_bucket_tags(bucket_name, {TAG_KEY: model.tags})
        except REMOTE_ERRORS as e:
            metrics.bucket_operations_total.labels(operation="create", result="failed").inc()
            return self._rollback_create(model, e, diags)

        metrics.bucket_operations_total.labels(operation="create", result="success").inc()
        self.log_info(bucket_name, f"Bucket {bucket_name} created successfully", event="created", reason="BucketCreated")

        state = State()
        diags.extend(state.set(model.stamped(self.clock())))
        return OperationResult(state, diags)

    def _rollback_create(
        self,
        model: BucketResourceModel,
        error: BaseException,
        diags: Diagnostics,
    ) -> OperationResult:
        """Undo a bucket creation whose tagging failed.

        If the rollback fails too, a partial record with empty tags is kept so
        the host still tracks the bucket and retries tagging through update.
        """
        bucket_name = model.name
        diags.add_error(
            "Error tagging bucket",
            f"Bucket {bucket_name} was created but could not be tagged: {sanitize_exception(error)}",
            kind=ErrorKind.PARTIAL_SUCCESS,
        )

        try:
            self.client.delete_bucket(bucket_name)
        except REMOTE_ERRORS as rollback_error:
            self.log_error(
                bucket_name,
                f"Rollback of bucket {bucket_name} failed, keeping partial state",
                error=rollback_error,
                reason="RollbackFailed",
            )
            diags.add_warning(
                "Bucket left in place",
                f"Bucket {bucket_name} could not be removed after the tagging failure "
                f"({sanitize_exception(rollback_error)}); it is recorded without tags.",
                kind=ErrorKind.PARTIAL_SUCCESS,
            )
            state = State()
            partial = BucketResourceModel(name=bucket_name, tags="")
            diags.extend(state.set(partial.stamped(self.clock())))
            return OperationResult(state, diags)

        self.log_warning(bucket_name, f"Bucket {bucket_name} rolled back after tagging failure", reason="RolledBack")
        return OperationResult(State(), diags)

    def _read(self, state: State) -> OperationResult:
        model, diags = state.get()
        if model is None:
            return OperationResult(state, diags)
        if self.client is None:
            self.not_configured(diags)
            return OperationResult(state, diags)

        bucket_name = normalize(model.name)

        try:
            self.client.head_bucket(bucket_name)
        except REMOTE_ERRORS as e:
            if client_error_code(e) in MISSING_BUCKET_ERROR_CODES:
                return self._bucket_missing(state, bucket_name, diags)
            diags.add_error(
                "Error reading bucket",
                f"Could not read bucket {bucket_name}, unexpected error: {sanitize_exception(e)}",
                kind=ErrorKind.REMOTE_CALL,
            )
            return OperationResult(state, diags)

        refreshed = State()
        diags.extend(refreshed.set(model))
        return OperationResult(refreshed, diags)

    def _bucket_missing(self, state: State, bucket_name: str, diags: Diagnostics) -> OperationResult:
        if self.remove_missing_on_read:
            diags.add_warning(
                "Bucket not found",
                f"Bucket {bucket_name} no longer exists and was removed from state.",
                kind=ErrorKind.NOT_FOUND,
            )
            return OperationResult(State(), diags)

        diags.add_error(
            "Bucket not found",
            f"Bucket {bucket_name} no longer exists.",
            kind=ErrorKind.NOT_FOUND,
        )
        return OperationResult(state, diags)

    def _update(self, plan: Plan, state: State | None) -> OperationResult:
        prior_state = state if state is not None else State()
        model, diags = plan.get()
        if model is None:
            return OperationResult(prior_state, diags)

        model = model.normalized()
        bucket_name = model.name

        if not prior_state.is_null:
            prior, prior_diags = prior_state.get()
            diags.extend(prior_diags)
            if prior is not None and normalize(prior.name) != bucket_name:
                diags.add_error(
                    "Bucket name cannot be changed",
                    f"Bucket {normalize(prior.name)} cannot be renamed to {bucket_name} in place; "
                    "the resource must be replaced.",
                    kind=ErrorKind.VALIDATION,
                    attribute="name",
                )
        if diags.has_error():
            return OperationResult(prior_state, diags)

        if self.client is None:
            self.not_configured(diags)
            return OperationResult(prior_state, diags)

        try:
            self.client.set_bucket_tags(bucket_name, {TAG_KEY: model.tags})
        except REMOTE_ERRORS as e:
            metrics.bucket_operations_total.labels(operation="update", result="failed").inc()
            diags.add_error(
                "Error updating bucket tags",
                f"Could not tag bucket {bucket_name}, unexpected error: {sanitize_exception(e)}",
                kind=ErrorKind.REMOTE_CALL,
            )
            return OperationResult(prior_state, diags)

        metrics.bucket_operations_total.labels(operation="update", result="success").inc()
        self.log_info(bucket_name, f"Bucket {bucket_name} tags updated", event="updated", reason="BucketUpdated")

        updated = State()
        diags.extend(updated.set(model.stamped(self.clock())))
        return OperationResult(updated, diags)

    def _delete(self, state: State) -> OperationResult:
        model, diags = state.get()
        if model is None:
            return OperationResult(state, diags)
        if self.client is None:
            self.not_configured(diags)
            return OperationResult(state, diags)

        bucket_name = normalize(model.name)

        try:
            self.client.delete_bucket(bucket_name)
        except REMOTE_ERRORS as e:
            metrics.bucket_operations_total.labels(operation="delete", result="failed").inc()
            diags.add_error(
                "Error deleting bucket",
                f"Could not delete bucket {bucket_name}, unexpected error: {sanitize_exception(e)}",
                kind=ErrorKind.REMOTE_CALL,
            )
            return OperationResult(state, diags)

        metrics.bucket_operations_total.labels(operation="delete", result="success").inc()
        self.log_info(bucket_name, f"Bucket {bucket_name} deleted", event="deleted", reason="BucketDeleted")
        return OperationResult(State(), diags)
