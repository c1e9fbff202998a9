"""Local file output for generated feeds."""

import logging
from pathlib import Path, PurePosixPath

from sumppi.utils.errors import StorageError

logger = logging.getLogger(__name__)

FEED_SUFFIX = ".rss"


def feed_filename(guid: str, s3_path: str | None = None) -> str:
    """Choose the local filename for a series feed.

    The S3 object name is reused when it already ends in ``.rss``,
    otherwise the feed is named after the series GUID.
    """
    if s3_path:
        name = PurePosixPath(s3_path).name
        if name.endswith(FEED_SUFFIX):
            return name
    return f"{guid}{FEED_SUFFIX}"


def write_feed(content: str, path: Path) -> Path:
    """Write feed text to ``path``, creating parent directories.

    Raises:
        StorageError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"failed to write RSS file {path}: {e}") from e

    logger.info("Wrote %d characters to %s", len(content), path)
    return path
