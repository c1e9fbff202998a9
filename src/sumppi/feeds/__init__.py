"""Series data models, fetching, and RSS feed generation for Sumppi."""

from sumppi.feeds.fetcher import SeriesFetcher, load_series_file
from sumppi.feeds.generator import format_duration, generate_feed
from sumppi.feeds.latest import latest_episode, latest_episode_date
from sumppi.feeds.models import Episode, SeriesData

__all__ = [
    "Episode",
    "SeriesData",
    "SeriesFetcher",
    "load_series_file",
    "format_duration",
    "generate_feed",
    "latest_episode",
    "latest_episode_date",
]
