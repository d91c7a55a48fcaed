"""Datetime utilities."""

from datetime import datetime, timezone, timedelta

from dateutil.parser import parse as parse_date

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
    "MSK": timezone(timedelta(hours=3)),
    "EET": timezone(timedelta(hours=2)),
    "EEST": timezone(timedelta(hours=3)),
}


def parse_published_date(value: str | None) -> datetime | None:
    """Parse an origin-supplied publish date. Returns None if absent or invalid."""
    if not value:
        return None

    try:
        dt = parse_date(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError):
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_date(published_at: datetime | None, fetched_at: datetime) -> datetime:
    """Return the publish date if known, else the time of fetch."""
    if published_at is None:
        return fetched_at
    return published_at
