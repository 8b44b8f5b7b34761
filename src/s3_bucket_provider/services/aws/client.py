"""AWS S3 client implementation."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics

logger = logging.getLogger(__name__)

# Region that rejects an explicit LocationConstraint
DEFAULT_REGION = "us-east-1"


class AWSProvider:
    """AWS S3 provider implementation."""

    def __init__(
        self,
        region: str,
        endpoint: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        session_token: str | None = None,
        path_style: bool = True,
        insecure_skip_verify: bool = False,
    ) -> None:
        """Initialize AWS S3 provider.

        Args:
            region: AWS region
            endpoint: S3 endpoint URL, None for the AWS default
            access_key: Access key ID, None for the default credential chain
            secret_key: Secret access key
            session_token: Optional session token for temporary credentials
            path_style: Use path-style addressing
            insecure_skip_verify: Skip TLS verification
        """
        self.endpoint = endpoint
        self.region = region
        self.path_style = path_style

        config = boto3.session.Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if path_style else "auto"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token,
            config=config,
            verify=not insecure_skip_verify,
        )

    def _call(self, operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
        """Invoke a boto3 operation, recording call metrics."""
        start_time = time.time()
        try:
            response = fn(**kwargs)
            metrics.api_call_total.labels(api_type="s3", operation=operation, result="success").inc()
            return response
        except (ClientError, BotoCoreError):
            metrics.api_call_total.labels(api_type="s3", operation=operation, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="s3", operation=operation).observe(duration)

    def create_bucket(self, name: str, region: str | None = None) -> None:
        """Create a bucket in the given region (defaults to the provider region)."""
        region = region or self.region
        create_params: dict[str, Any] = {"Bucket": name}
        if region and region != DEFAULT_REGION:
            create_params["CreateBucketConfiguration"] = {"LocationConstraint": region}

        try:
            self._call("create_bucket", self.client.create_bucket, **create_params)
            logger.info(f"Bucket {name} created successfully")
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to create bucket {name}: {e}")
            raise

    def set_bucket_tags(self, name: str, tags: dict[str, str]) -> None:
        """Set bucket tags."""
        try:
            tag_set = [{"Key": k, "Value": v} for k, v in tags.items()]
            self._call(
                "put_bucket_tagging",
                self.client.put_bucket_tagging,
                Bucket=name,
                Tagging={"TagSet": tag_set},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to set tags for bucket {name}: {e}")
            raise

    def head_bucket(self, name: str) -> None:
        """Probe a bucket; raises ClientError when it is missing or forbidden."""
        try:
            self._call("head_bucket", self.client.head_bucket, Bucket=name)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get bucket information for {name}: {e}")
            raise

    def delete_bucket(self, name: str) -> None:
        """Delete a bucket. The bucket must already be empty."""
        try:
            self._call("delete_bucket", self.client.delete_bucket, Bucket=name)
            logger.info(f"Successfully deleted bucket {name}")
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete bucket {name}: {e}")
            raise
