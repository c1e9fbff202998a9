"""Feed output: local files and S3."""

from sumppi.storage.local import feed_filename, write_feed
from sumppi.storage.s3 import S3Uploader, create_uploader, parse_s3_path, public_url

__all__ = [
    "feed_filename",
    "write_feed",
    "S3Uploader",
    "create_uploader",
    "parse_s3_path",
    "public_url",
]
