"""Provider: builds the S3 client once and hands it to its resources."""

from __future__ import annotations

import logging
from typing import Callable

from .builders.provider import create_provider_from_config
from .config import ProviderConfig
from .diagnostics import Diagnostics, ErrorKind
from .resources.bucket import BucketResource
from .services.aws.client import AWSProvider
from .utils.errors import sanitize_exception

logger = logging.getLogger(__name__)


class BucketProvider:
    """Provider serving the bucket resource."""

    def __init__(self, config: ProviderConfig | None = None) -> None:
        self.config = config or ProviderConfig()
        self.provider_data: AWSProvider | None = None

    def metadata(self) -> str:
        """Return the provider type name, the prefix of every resource type name."""
        return self.config.type_name

    def configure(self, config: ProviderConfig | None = None) -> Diagnostics:
        """Build the S3 client from configuration.

        Args:
            config: Provider configuration; defaults to the one given at construction
        """
        diags = Diagnostics()
        if config is not None:
            self.config = config

        try:
            self.provider_data = create_provider_from_config(self.config)
        except ValueError as e:
            self.provider_data = None
            diags.add_error(
                "Invalid Provider Configuration",
                f"Unable to create the S3 client: {sanitize_exception(e)}",
                kind=ErrorKind.CONFIGURATION,
            )
            return diags

        logger.info(
            f"Configured S3 client for region {self.config.region} "
            f"at {self.config.endpoint or 'the AWS default endpoint'}"
        )
        return diags

    def resources(self) -> list[Callable[..., BucketResource]]:
        """Factories for every resource this provider serves."""
        return [BucketResource]

    def resource_type_names(self) -> list[str]:
        return [factory().metadata(self.metadata()) for factory in self.resources()]

    def new_resource(self) -> tuple[BucketResource, Diagnostics]:
        """Create a bucket resource wired to the configured client."""
        resource = BucketResource(remove_missing_on_read=self.config.remove_missing_on_read)
        diags = resource.configure(self.provider_data)
        return resource, diags
