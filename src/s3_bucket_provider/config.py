"""Provider configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from .constants import DEFAULT_PROVIDER_TYPE_NAME

TRUE_VALUES = {"true", "1", "yes"}


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class ProviderConfig:
    """Settings used to build the S3 client and tune resource behaviour."""

    region: str = "us-east-1"
    endpoint: str | None = None
    access_key: str | None = None
    secret_key: str | None = None
    session_token: str | None = None
    path_style: bool = True
    insecure_skip_verify: bool = False
    type_name: str = DEFAULT_PROVIDER_TYPE_NAME
    remove_missing_on_read: bool = False

    @classmethod
    def from_env(cls) -> ProviderConfig:
        """Build the configuration from environment variables.

        Environment Variables:
            S3_ENDPOINT: S3 endpoint URL (default: AWS)
            S3_REGION / AWS_REGION: Region (default: us-east-1)
            AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN: Credentials
            S3_PATH_STYLE: Use path-style addressing (default: true)
            S3_INSECURE_SKIP_VERIFY: Skip TLS verification (default: false)
            PROVIDER_TYPE_NAME: Prefix of resource type names (default: s3)
            REMOVE_MISSING_ON_READ: Drop state of buckets deleted out of band (default: false)
        """
        return cls(
            region=os.getenv("S3_REGION") or os.getenv("AWS_REGION") or "us-east-1",
            endpoint=os.getenv("S3_ENDPOINT") or None,
            access_key=os.getenv("AWS_ACCESS_KEY_ID") or None,
            secret_key=os.getenv("AWS_SECRET_ACCESS_KEY") or None,
            session_token=os.getenv("AWS_SESSION_TOKEN") or None,
            path_style=_as_bool(os.getenv("S3_PATH_STYLE"), True),
            insecure_skip_verify=_as_bool(os.getenv("S3_INSECURE_SKIP_VERIFY"), False),
            type_name=os.getenv("PROVIDER_TYPE_NAME", DEFAULT_PROVIDER_TYPE_NAME),
            remove_missing_on_read=_as_bool(os.getenv("REMOVE_MISSING_ON_READ"), False),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProviderConfig:
        """Build the configuration from a provider block with camelCase keys."""
        return cls(
            region=data.get("region") or "us-east-1",
            endpoint=data.get("endpoint"),
            access_key=data.get("accessKey"),
            secret_key=data.get("secretKey"),
            session_token=data.get("sessionToken"),
            path_style=_as_bool(data.get("pathStyle"), True),
            insecure_skip_verify=_as_bool(data.get("insecureSkipVerify"), False),
            type_name=data.get("typeName") or DEFAULT_PROVIDER_TYPE_NAME,
            remove_missing_on_read=_as_bool(data.get("removeMissingOnRead"), False),
        )
