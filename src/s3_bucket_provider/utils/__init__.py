"""Utility functions for the S3 Bucket Provider."""

from .conditions import set_ready_condition, update_condition
from .errors import client_error_code, sanitize_dict, sanitize_error_message, sanitize_exception

__all__ = [
    "update_condition",
    "set_ready_condition",
    "client_error_code",
    "sanitize_dict",
    "sanitize_error_message",
    "sanitize_exception",
]
