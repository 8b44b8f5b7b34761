"""Builder for S3 provider instances."""

from __future__ import annotations

from ..config import ProviderConfig
from ..services.aws.client import AWSProvider


def create_provider_from_config(config: ProviderConfig) -> AWSProvider:
    """Create an S3 provider instance from provider configuration.

    Args:
        config: Provider configuration

    Returns:
        Configured S3 provider instance

    Raises:
        ValueError: If configuration is invalid
    """
    if not config.region:
        raise ValueError("region is required")

    if bool(config.access_key) != bool(config.secret_key):
        raise ValueError("accessKey and secretKey must be set together")

    if config.session_token and not config.access_key:
        raise ValueError("sessionToken requires accessKey and secretKey")

    if config.endpoint and not config.endpoint.startswith(("http://", "https://")):
        raise ValueError(f"endpoint must be an http(s) URL, got {config.endpoint!r}")

    return AWSProvider(
        region=config.region,
        endpoint=config.endpoint,
        access_key=config.access_key,
        secret_key=config.secret_key,
        session_token=config.session_token,
        path_style=config.path_style,
        insecure_skip_verify=config.insecure_skip_verify,
    )
