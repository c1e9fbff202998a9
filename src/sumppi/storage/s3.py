"""S3 storage for generated feeds."""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sumppi.utils.errors import InvalidStoragePathError, StorageError

logger = logging.getLogger(__name__)

S3_SCHEME = "s3://"
FEED_CONTENT_TYPE = "application/rss+xml"
FEED_ACL = "public-read"


def parse_s3_path(s3_path: str) -> tuple[str, str]:
    """Split ``s3://bucket/key`` into bucket and key.

    Raises:
        InvalidStoragePathError: If the scheme is wrong or bucket/key is missing
    """
    if not s3_path.startswith(S3_SCHEME):
        raise InvalidStoragePathError(
            f"invalid S3 path {s3_path!r}: must start with {S3_SCHEME}"
        )

    bucket, sep, key = s3_path[len(S3_SCHEME):].partition("/")
    if not bucket or not sep or not key:
        raise InvalidStoragePathError(
            f"invalid S3 path {s3_path!r}: must be in format s3://bucket/key"
        )

    return bucket, key


def public_url(s3_path: str, region: str | None = None) -> str:
    """Return the public HTTPS URL of an object uploaded with public-read ACL."""
    bucket, key = parse_s3_path(s3_path)
    if region:
        return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"
    return f"https://{bucket}.s3.amazonaws.com/{key}"


class S3Uploader:
    """Uploads feed documents to S3."""

    def __init__(self, client: Any | None = None, region: str | None = None) -> None:
        """Initialize the uploader.

        Args:
            client: boto3 S3 client. Created from the default credential
                chain when omitted.
            region: Optional AWS region for a newly created client
        """
        self.client = client or boto3.client("s3", region_name=region)

    def upload_feed(self, content: str, s3_path: str) -> None:
        """Upload feed text to ``s3_path`` as a public RSS document.

        Raises:
            InvalidStoragePathError: If ``s3_path`` is malformed
            StorageError: If the upload fails
        """
        bucket, key = parse_s3_path(s3_path)
        logger.info("Uploading feed to s3://%s/%s", bucket, key)

        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=content.encode("utf-8"),
                ContentType=FEED_CONTENT_TYPE,
                ACL=FEED_ACL,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"failed to upload to S3: {e}") from e

        logger.info("Uploaded %d bytes to %s", len(content), s3_path)


def create_uploader(region: str | None = None) -> S3Uploader | None:
    """Create an uploader, or return None when AWS cannot be configured."""
    try:
        return S3Uploader(region=region)
    except BotoCoreError as e:
        logger.warning("Failed to initialize S3 client: %s", e)
        return None
