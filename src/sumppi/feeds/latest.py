"""Latest episode lookup.

Unlike feed generation, which always produces a document, this query
reports honestly when it has no answer.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from sumppi.feeds.models import Episode
from sumppi.utils.datetime import format_short_date, now_utc, parse_rfc3339
from sumppi.utils.errors import NoEpisodesError, NoValidEpisodesError

logger = logging.getLogger(__name__)

# Entries scheduled further ahead than this are provisional, not "latest"
FUTURE_TOLERANCE = timedelta(days=7)


def latest_episode(
    episodes: Sequence[Episode], now: datetime | None = None
) -> tuple[Episode, datetime]:
    """Find the most recently published episode.

    Episodes with unparseable dates are skipped, as are episodes dated more
    than a week after ``now``.

    Args:
        episodes: Episodes in any order
        now: Reference time (default: current UTC time). A naive value is
            taken as UTC.

    Returns:
        Tuple of (episode, parsed publication time)

    Raises:
        NoEpisodesError: If ``episodes`` is empty
        NoValidEpisodesError: If every episode was skipped
    """
    if not episodes:
        raise NoEpisodesError("no episodes found")

    now = now or now_utc()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now + FUTURE_TOLERANCE
    latest: tuple[Episode, datetime] | None = None

    for episode in episodes:
        try:
            published = parse_rfc3339(episode.publication_date)
        except ValueError:
            logger.debug(
                "Skipping episode %s with invalid date %r",
                episode.guid,
                episode.publication_date,
            )
            continue

        if published > cutoff:
            logger.debug("Skipping future episode %s (%s)", episode.guid, published)
            continue

        if latest is None or published > latest[1]:
            latest = (episode, published)

    if latest is None:
        raise NoValidEpisodesError("no valid episodes found")

    return latest


def latest_episode_date(episodes: Sequence[Episode], now: datetime | None = None) -> str:
    """Return the latest publication date formatted as ``Mar 15, 2024``.

    Raises:
        NoEpisodesError: If ``episodes`` is empty
        NoValidEpisodesError: If every episode was skipped
    """
    _, published = latest_episode(episodes, now=now)
    return format_short_date(published)
