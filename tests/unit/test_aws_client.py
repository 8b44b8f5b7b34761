"""Unit tests for the boto3 S3 client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from s3_bucket_provider.services.aws.client import AWSProvider


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "failed"}}, operation)


class TestAWSProvider:
    """Test AWSProvider implementation."""

    @pytest.fixture
    def provider(self) -> AWSProvider:
        """Create a test provider with a mocked boto3 client."""
        provider = AWSProvider(
            region="eu-central-1",
            endpoint="https://s3.example.com",
            access_key="test-access-key",
            secret_key="test-secret-key",
        )
        provider.client = MagicMock()
        return provider

    def test_provider_initialization(self) -> None:
        """Test provider initialization."""
        provider = AWSProvider(
            region="us-east-1",
            endpoint="https://s3.amazonaws.com",
            access_key="test-access-key",
            secret_key="test-secret-key",
        )

        assert provider.endpoint == "https://s3.amazonaws.com"
        assert provider.region == "us-east-1"
        assert provider.path_style is True

    def test_default_endpoint(self) -> None:
        """Test that no endpoint means the AWS default."""
        provider = AWSProvider(region="us-east-1", access_key="a", secret_key="b")
        assert provider.endpoint is None

    @patch("s3_bucket_provider.services.aws.client.boto3.client")
    def test_boto3_client_options(self, mock_client: MagicMock) -> None:
        """Test that credentials, endpoint and TLS settings reach boto3."""
        AWSProvider(
            region="us-east-1",
            endpoint="https://minio.local",
            access_key="a",
            secret_key="b",
            session_token="c",
            insecure_skip_verify=True,
        )

        kwargs = mock_client.call_args[1]
        assert mock_client.call_args[0] == ("s3",)
        assert kwargs["endpoint_url"] == "https://minio.local"
        assert kwargs["aws_session_token"] == "c"
        assert kwargs["verify"] is False

    def test_create_bucket_with_location(self, provider: AWSProvider) -> None:
        """Test that non-default regions send a LocationConstraint."""
        provider.create_bucket("my-bucket")

        provider.client.create_bucket.assert_called_once_with(
            Bucket="my-bucket",
            CreateBucketConfiguration={"LocationConstraint": "eu-central-1"},
        )

    def test_create_bucket_default_region(self, provider: AWSProvider) -> None:
        """Test that us-east-1 sends no LocationConstraint."""
        provider.create_bucket("my-bucket", region="us-east-1")

        provider.client.create_bucket.assert_called_once_with(Bucket="my-bucket")

    def test_create_bucket_failure(self, provider: AWSProvider) -> None:
        """Test that remote errors propagate."""
        provider.client.create_bucket.side_effect = client_error("BucketAlreadyExists", "CreateBucket")

        with pytest.raises(ClientError):
            provider.create_bucket("my-bucket")

    def test_set_bucket_tags(self, provider: AWSProvider) -> None:
        """Test the tag set sent to S3."""
        provider.set_bucket_tags("my-bucket", {"tfkey": "env=prod"})

        provider.client.put_bucket_tagging.assert_called_once_with(
            Bucket="my-bucket",
            Tagging={"TagSet": [{"Key": "tfkey", "Value": "env=prod"}]},
        )

    def test_head_bucket_failure(self, provider: AWSProvider) -> None:
        """Test that head_bucket raises for a missing bucket."""
        provider.client.head_bucket.side_effect = client_error("404", "HeadBucket")

        with pytest.raises(ClientError):
            provider.head_bucket("my-bucket")

    def test_delete_bucket(self, provider: AWSProvider) -> None:
        """Test that delete does not empty the bucket first."""
        provider.delete_bucket("my-bucket")

        provider.client.delete_bucket.assert_called_once_with(Bucket="my-bucket")
        provider.client.list_objects_v2.assert_not_called()

    def test_delete_non_empty_bucket(self, provider: AWSProvider) -> None:
        """Test that the service's BucketNotEmpty error propagates."""
        provider.client.delete_bucket.side_effect = client_error("BucketNotEmpty", "DeleteBucket")

        with pytest.raises(ClientError):
            provider.delete_bucket("my-bucket")

    @patch("s3_bucket_provider.services.aws.client.metrics")
    def test_api_call_metrics(self, mock_metrics: MagicMock, provider: AWSProvider) -> None:
        """Test that remote calls are counted by result."""
        provider.delete_bucket("my-bucket")
        mock_metrics.api_call_total.labels.assert_called_with(
            api_type="s3", operation="delete_bucket", result="success"
        )

        provider.client.delete_bucket.side_effect = client_error("BucketNotEmpty", "DeleteBucket")
        with pytest.raises(ClientError):
            provider.delete_bucket("my-bucket")
        mock_metrics.api_call_total.labels.assert_called_with(
            api_type="s3", operation="delete_bucket", result="error"
        )
        mock_metrics.api_call_duration_seconds.labels.assert_called_with(api_type="s3", operation="delete_bucket")
