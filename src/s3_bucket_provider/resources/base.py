"""Base resource class with common functionality for all provider resources."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from .. import metrics
from ..constants import CONTROLLER_NAME
from ..diagnostics import Diagnostics, ErrorKind
from ..logging import log_resource_event
from ..state import BucketResourceModel, State
from ..tracing import set_span_status, trace_span
from ..utils.errors import sanitize_exception


@dataclass
class OperationResult:
    """Outcome of one lifecycle operation: the state to persist and its diagnostics.

    A null state means the resource is absent after the operation.
    """

    state: State = field(default_factory=State)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def succeeded(self) -> bool:
        return not self.diagnostics.has_error()

    @property
    def record(self) -> BucketResourceModel | None:
        raw = self.state.raw
        return BucketResourceModel.from_dict(raw) if raw is not None else None


class BaseResource:
    """Base class for all provider resources with common functionality."""

    def __init__(self, kind: str):
        """Initialize base resource.

        Args:
            kind: The resource kind (e.g., "Bucket")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def log_info(
        self,
        resource_name: str,
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=resource_name,
            event=event,
            reason=reason,
            message=message,
            **kwargs,
        )

    def log_warning(
        self,
        resource_name: str,
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=resource_name,
            event=event,
            reason=reason,
            message=message,
            level=logging.WARNING,
            **kwargs,
        )

    def log_error(
        self,
        resource_name: str,
        message: str,
        error: BaseException | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            resource_name: Name of the resource the message is about
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()

        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__

        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=resource_name,
            event=event,
            reason=reason,
            message=message,
            level=logging.ERROR,
            **log_data,
        )

    def not_configured(self, diags: Diagnostics) -> None:
        """Record that a lifecycle call arrived before a client was configured."""
        diags.add_error(
            "Unconfigured S3 Client",
            "Expected a configured S3 client. Please report this issue to the provider developers.",
            kind=ErrorKind.NOT_CONFIGURED,
        )

    def run_operation(
        self,
        operation: str,
        resource_name: str,
        operation_fn: Callable[[], OperationResult],
    ) -> OperationResult:
        """Execute a lifecycle operation with tracing, metrics and logging.

        Args:
            operation: Operation name (e.g., "create")
            resource_name: Name used in logs and span attributes
            operation_fn: Function performing the operation
        """
        metrics.lifecycle_total.labels(operation=operation, result="started").inc()

        start_time = time.time()
        with trace_span(f"{operation}_{self.kind.lower()}", kind=self.kind, attributes={"bucket.name": resource_name}):
            try:
                result = operation_fn()
            except Exception as e:
                self.log_error(resource_name, f"{operation} raised unexpectedly", error=e, reason="OperationFailed")
                metrics.lifecycle_total.labels(operation=operation, result="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                metrics.lifecycle_duration_seconds.labels(operation=operation).observe(duration)

            if result.succeeded:
                metrics.lifecycle_total.labels(operation=operation, result="success").inc()
                set_span_status(True)
            else:
                metrics.lifecycle_total.labels(operation=operation, result="failed").inc()
                for diagnostic in result.diagnostics.errors:
                    kind = diagnostic.kind.value if diagnostic.kind else "unknown"
                    metrics.error_total.labels(operation=operation, error_kind=kind).inc()
                    self.log_error(resource_name, str(diagnostic), reason="OperationFailed", error_kind=kind)
                set_span_status(False, "; ".join(str(d) for d in result.diagnostics.errors))

            for diagnostic in result.diagnostics.warnings:
                self.log_warning(resource_name, str(diagnostic))

        return result
