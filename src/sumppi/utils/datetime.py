"""Date helpers shared by the feed generator and the latest-episode query.

Upstream dates are RFC 3339 strings. Parsing here is strict:
``datetime.fromisoformat`` alone would also accept date-only strings and
naive timestamps, which the API never produces for valid entries.
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime

_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)

# Fixed English abbreviations so output does not depend on the process locale
_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def now_utc() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str | None) -> datetime:
    """Parse a strict RFC 3339 timestamp.

    Args:
        value: Timestamp such as ``2024-03-15T08:30:00+02:00``

    Returns:
        Timezone-aware datetime keeping the original offset

    Raises:
        ValueError: If the value is missing or not valid RFC 3339
    """
    if not value or not _RFC3339_PATTERN.fullmatch(value):
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")

    normalized = value.upper()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"

    # Range errors (month 13, hour 25) surface as ValueError from here
    return datetime.fromisoformat(normalized)


def format_rfc1123(moment: datetime) -> str:
    """Format as RFC 1123 with a numeric zone, e.g. ``Mon, 02 Jan 2006 15:04:05 -0700``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_datetime(moment)


def format_short_date(moment: datetime) -> str:
    """Format as ``Mon D, YYYY`` (``Jan 2, 2006``)."""
    month = _MONTH_ABBREVIATIONS[moment.month - 1]
    return f"{month} {moment.day}, {moment.year}"
