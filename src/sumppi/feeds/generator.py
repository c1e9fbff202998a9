"""RSS 2.0 / iTunes podcast feed generation.

Turns a :class:`~sumppi.feeds.models.SeriesData` into feed XML text. The
transform is pure: the only input besides the series is the wall clock,
used when an episode's publication date cannot be parsed.
"""

import logging
import re
import xml.etree.ElementTree as ET

from sumppi.feeds.models import Episode, SeriesData
from sumppi.utils.datetime import format_rfc1123, now_utc, parse_rfc3339
from sumppi.utils.errors import FeedGenerationError

logger = logging.getLogger(__name__)

RSS_VERSION = "2.0"
ITUNES_NAMESPACE = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ENCLOSURE_TYPE = "audio/mpeg"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Code points outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def format_duration(seconds: int) -> str:
    """Format a duration for ``itunes:duration``.

    ``H:MM:SS`` when at least an hour, otherwise ``M:SS``. Only the
    components after the leading one are zero-padded.

    Args:
        seconds: Non-negative duration in seconds

    Returns:
        Formatted duration, e.g. ``"2:05"`` or ``"1:02:05"``

    Raises:
        ValueError: If seconds is negative
    """
    if seconds < 0:
        raise ValueError(f"duration must be non-negative, got {seconds}")

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_pub_date(episode: Episode) -> str:
    """Return the episode's ``pubDate`` text.

    A missing or malformed publication date falls back to the current
    time so one bad entry never prevents the feed from being built.
    """
    try:
        published = parse_rfc3339(episode.publication_date)
    except ValueError:
        logger.warning(
            "Episode %s has invalid publication date %r, using current time",
            episode.guid or episode.title,
            episode.publication_date,
        )
        published = now_utc()
    return format_rfc1123(published)


def xml_safe(value: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", value)


def _text_element(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = xml_safe(text)
    return element


def _build_item(channel: ET.Element, episode: Episode) -> None:
    item = ET.SubElement(channel, "item")
    _text_element(item, "title", episode.title)
    _text_element(item, "description", episode.description)
    _text_element(item, "pubDate", format_pub_date(episode))

    guid = _text_element(item, "guid", episode.guid)
    guid.set("isPermaLink", "false")

    ET.SubElement(
        item,
        "enclosure",
        {
            "url": xml_safe(episode.audio_url),
            "length": str(episode.audio_length),
            "type": ENCLOSURE_TYPE,
        },
    )
    _text_element(item, "itunes:duration", format_duration(episode.audio_duration))


def build_feed_element(series: SeriesData) -> ET.Element:
    """Build the ``<rss>`` element tree for a series."""
    rss = ET.Element("rss", {"version": RSS_VERSION, "xmlns:itunes": ITUNES_NAMESPACE})

    channel = ET.SubElement(rss, "channel")
    _text_element(channel, "title", series.title)
    _text_element(channel, "description", series.description)
    _text_element(channel, "itunes:author", series.author)
    ET.SubElement(channel, "itunes:image", {"href": xml_safe(series.cover_url)})

    for episode in series.episodes:
        _build_item(channel, episode)

    return rss


def generate_feed(series: SeriesData) -> str:
    """Generate RSS feed XML for a series.

    Items appear in the same order as ``series.episodes``.

    Args:
        series: Decoded series data

    Returns:
        Complete XML document, including the XML declaration

    Raises:
        FeedGenerationError: If the document cannot be serialized
    """
    rss = build_feed_element(series)
    ET.indent(rss, space="  ")

    try:
        body = ET.tostring(rss, encoding="unicode")
    except (TypeError, ValueError) as e:
        raise FeedGenerationError(f"failed to marshal XML: {e}") from e

    # A raw CR in text content would be read back as LF
    body = body.replace("\r", "&#xD;")

    logger.debug(
        "Generated feed for %s with %d items", series.guid, len(series.episodes)
    )
    return XML_HEADER + body
