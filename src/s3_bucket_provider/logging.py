"""Structured logging configuration for the S3 Bucket Provider."""

import json
import logging
import os
import sys
from typing import Any

from .utils.errors import sanitize_dict


def setup_structured_logging() -> None:
    """Configure structured JSON logging."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(sanitize_dict(kwargs))
    logger.log(level, json.dumps(log_data, default=str))
