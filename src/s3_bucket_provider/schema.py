"""Schema declarations for provider resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .diagnostics import Diagnostics, ErrorKind


@dataclass(frozen=True)
class Attribute:
    """A string attribute of a resource schema."""

    description: str
    required: bool = False
    computed: bool = False
    requires_replace: bool = False


@dataclass(frozen=True)
class Schema:
    """Attributes a resource accepts and produces."""

    description: str
    attributes: dict[str, Attribute] = field(default_factory=dict)

    def validate(self, raw: Mapping[str, Any]) -> Diagnostics:
        """Check a raw record against the schema.

        Unknown attributes, missing required attributes and non-string values
        are reported as validation errors. Computed attributes may be absent
        or None.
        """
        diags = Diagnostics()

        for key in raw:
            if key not in self.attributes:
                diags.add_error(
                    "Unsupported attribute",
                    f'An attribute named "{key}" is not expected here.',
                    kind=ErrorKind.VALIDATION,
                    attribute=key,
                )

        for key, attribute in self.attributes.items():
            value = raw.get(key)
            if value is None:
                if attribute.required:
                    diags.add_error(
                        "Missing required attribute",
                        f'The attribute "{key}" is required, but no definition was found.',
                        kind=ErrorKind.VALIDATION,
                        attribute=key,
                    )
                continue
            if not isinstance(value, str):
                diags.add_error(
                    "Incorrect attribute value type",
                    f'Inappropriate value for attribute "{key}": string required, got {type(value).__name__}.',
                    kind=ErrorKind.VALIDATION,
                    attribute=key,
                )

        return diags


BUCKET_SCHEMA = Schema(
    description="Manages an s3 bucket.",
    attributes={
        "last_updated": Attribute(description="Date Updated", computed=True),
        "date": Attribute(description="Date Created", computed=True),
        "name": Attribute(description="S3 Bucket Name", required=True, requires_replace=True),
        "tags": Attribute(description="S3 Bucket Tags", required=True),
    },
)
