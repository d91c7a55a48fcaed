"""RSS feed fetching."""

import logging
from itertools import islice
from typing import Iterator

import feedparser
import requests

from ingest_articles.clean_articles.clean import clean_text
from ingest_articles.fetch_articles.errors import TransientFetchError
from ingest_articles.models import RawArticle, RSSSource

logger = logging.getLogger(__name__)

USER_AGENT = "media-insights/1.0 (RSS reader)"


def fetch_rss_articles(
    source: RSSSource,
    limit: int = 10,
    timeout: float = 30,
) -> Iterator[RawArticle]:
    """Fetch the first `limit` items of a source's RSS feed.

    Raises:
        TransientFetchError: If the feed cannot be fetched or parsed.
    """
    feed = _fetch_feed(source.url, timeout)

    for entry in islice(feed.entries, limit):
        try:
            article = _parse_entry(entry, source.name)
        except Exception as e:
            logger.warning("Failed to parse entry from %s: %s", source.name, e)
            continue
        if article is not None:
            yield article


def _fetch_feed(feed_url: str, timeout: float) -> feedparser.FeedParserDict:
    """Fetch and parse a single RSS feed."""
    try:
        response = requests.get(
            feed_url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransientFetchError(feed_url, str(e)) from e

    feed = feedparser.parse(response.content)
    if feed.bozo and not feed.entries:
        raise TransientFetchError(feed_url, f"unparseable feed: {feed.get('bozo_exception')}")

    return feed


def _parse_entry(entry, source: str) -> RawArticle | None:
    """Parse a single RSS entry into a RawArticle."""
    link = (entry.get("link") or "").strip()
    if not link:
        return None

    title = (entry.get("title") or "").strip()
    if not title:
        return None

    return RawArticle(
        source=source,
        title=title,
        link=link,
        pub_date=entry.get("published") or entry.get("updated"),
        description=clean_text(entry.get("summary")) or "",
    )
