"""Daily GDELT event export download and filtering."""

import csv
import io
import logging
import zipfile
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Iterator, Optional

import requests

from fetch_events.models import GdeltEvent
from ingest_articles.fetch_articles.errors import TransientFetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://data.gdeltproject.org/events"

# Column positions in the tab-separated GDELT 1.0 export
EVENT_ID = 0
SQL_DATE = 1
ACTOR1_NAME = 6
ACTOR1_COUNTRY_CODE = 7
ACTOR2_NAME = 16
ACTOR2_COUNTRY_CODE = 17
EVENT_CODE = 26
GOLDSTEIN_SCALE = 30
AVG_TONE = 34
ACTION_GEO_FULL_NAME = 50
ACTION_GEO_COUNTRY_CODE = 51
SOURCE_URL = 57


def yesterday() -> date:
    return (datetime.now(timezone.utc) - timedelta(days=1)).date()


def build_export_url(day: date, base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{day.strftime('%Y%m%d')}.export.CSV.zip"


def fetch_daily_events(
    day: Optional[date] = None,
    actor_country_code: str = "UKR",
    geo_country_code: str = "UP",
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 60,
) -> list[GdeltEvent]:
    """Download one day's export and keep events involving the given country.

    Actor country codes are CAMEO codes (e.g. "UKR"); the action location uses
    FIPS codes (e.g. "UP").

    Raises:
        TransientFetchError: If the export cannot be downloaded or unzipped.
    """
    day = day or yesterday()
    url = build_export_url(day, base_url)

    logger.info("Fetching GDELT events from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransientFetchError(url, str(e)) from e

    try:
        rows = list(read_export(response.content))
    except (zipfile.BadZipFile, IndexError) as e:
        raise TransientFetchError(url, f"invalid export archive: {e}") from e

    events = list(filter_events(rows, actor_country_code, geo_country_code))
    logger.info("Found %d events related to %s for %s", len(events), actor_country_code, day.isoformat())
    return events


def read_export(content: bytes) -> Iterator[list[str]]:
    """Yield rows of the first file in a zipped tab-separated export."""
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        name = archive.namelist()[0]
        with archive.open(name) as raw:
            reader = csv.reader(io.TextIOWrapper(raw, encoding="utf-8", errors="replace"), delimiter="\t")
            yield from reader


def filter_events(
    rows: Iterable[list[str]],
    actor_country_code: str,
    geo_country_code: str,
) -> Iterator[GdeltEvent]:
    for row in rows:
        if len(row) <= ACTION_GEO_COUNTRY_CODE:
            continue
        if (
            row[ACTOR1_COUNTRY_CODE] == actor_country_code
            or row[ACTOR2_COUNTRY_CODE] == actor_country_code
            or row[ACTION_GEO_COUNTRY_CODE] == geo_country_code
        ):
            yield _to_event(row)


def _to_event(row: list[str]) -> GdeltEvent:
    return GdeltEvent(
        event_id=row[EVENT_ID],
        sql_date=row[SQL_DATE],
        actor1_name=row[ACTOR1_NAME],
        actor1_country_code=row[ACTOR1_COUNTRY_CODE],
        actor2_name=row[ACTOR2_NAME],
        actor2_country_code=row[ACTOR2_COUNTRY_CODE],
        event_code=row[EVENT_CODE],
        goldstein_scale=_to_float(row[GOLDSTEIN_SCALE]),
        avg_tone=_to_float(row[AVG_TONE]),
        action_geo_full_name=row[ACTION_GEO_FULL_NAME],
        action_geo_country_code=row[ACTION_GEO_COUNTRY_CODE],
        source_url=row[SOURCE_URL] if len(row) > SOURCE_URL else "",
    )


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None
