"""Series data fetching from the series JSON API."""

import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from sumppi.feeds.models import SeriesData, SeriesResponse
from sumppi.utils.errors import FetchError, SeriesDecodeError

logger = logging.getLogger(__name__)

DEFAULT_API_URL_TEMPLATE = (
    "https://appdata.richie.fi/books/feeds/v3/Nelonen/podcast_series/{guid}.json"
)


def decode_series(payload: str | bytes) -> SeriesData:
    """Decode a ``{"data": ...}`` envelope into SeriesData.

    Raises:
        SeriesDecodeError: If the payload is not valid JSON or fails validation
    """
    try:
        return SeriesResponse.model_validate_json(payload).data
    except ValidationError as e:
        raise SeriesDecodeError(f"failed to decode JSON response: {e}") from e


class SeriesFetcher:
    """Fetches series data over HTTP."""

    def __init__(
        self,
        url_template: str = DEFAULT_API_URL_TEMPLATE,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            url_template: Endpoint URL with a ``{guid}`` placeholder
            timeout: HTTP request timeout in seconds
            client: Optional preconfigured httpx client (used by tests)
        """
        self.url_template = url_template
        self.timeout = timeout
        self._client = client

    def series_url(self, guid: str) -> str:
        """Build the endpoint URL for a series."""
        return self.url_template.format(guid=guid)

    def fetch(self, guid: str) -> SeriesData:
        """Fetch and decode one series.

        Args:
            guid: Series identifier

        Returns:
            Decoded series data

        Raises:
            FetchError: If the request fails or returns a non-200 status
            SeriesDecodeError: If the response body cannot be decoded
        """
        if not guid:
            raise FetchError("series guid must not be empty")

        url = self.series_url(guid)
        logger.info("Fetching series data from %s", url)

        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self.timeout)
            else:
                response = httpx.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise FetchError(f"failed to fetch series data: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise FetchError(f"API returned status code {response.status_code}")

        series = decode_series(response.content)
        logger.info(
            "Fetched series '%s' with %d episodes", series.title, len(series.episodes)
        )
        return series


def load_series_file(path: Path) -> SeriesData:
    """Load a series envelope from a local JSON file.

    Raises:
        FetchError: If the file cannot be read
        SeriesDecodeError: If the content cannot be decoded
    """
    logger.info("Loading series data from %s", path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise FetchError(f"failed to read series file {path}: {e}") from e

    return decode_series(content)
