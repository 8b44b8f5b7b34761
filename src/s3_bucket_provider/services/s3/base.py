"""Base S3 provider interface."""

from __future__ import annotations

from typing import Protocol


class S3Provider(Protocol):
    """Protocol defining the S3 operations a bucket resource needs.

    Implementations raise botocore errors on failure; callers turn them into
    diagnostics.
    """

    def create_bucket(self, name: str, region: str | None = None) -> None:
        """Create a bucket."""
        ...

    def set_bucket_tags(self, name: str, tags: dict[str, str]) -> None:
        """Replace the tag set of a bucket."""
        ...

    def head_bucket(self, name: str) -> None:
        """Probe a bucket, raising if it is missing or inaccessible."""
        ...

    def delete_bucket(self, name: str) -> None:
        """Delete an empty bucket."""
        ...
