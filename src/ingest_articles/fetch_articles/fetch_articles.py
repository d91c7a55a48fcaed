"""Per-source fetching with failure containment."""

import logging

from ingest_articles.fetch_articles.fetch_html_articles import fetch_html_articles
from ingest_articles.fetch_articles.fetch_rss_articles import fetch_rss_articles
from ingest_articles.models import HTMLSource, RSSSource, SourceFetchResult

logger = logging.getLogger(__name__)


def fetch_source_articles(
    source: RSSSource | HTMLSource,
    limit: int,
    timeout: float,
) -> SourceFetchResult:
    """Fetch raw article candidates for one source.

    Never raises: a failing source is logged and returned with no articles.
    """
    logger.info("Fetching articles from %s", source.name)

    try:
        if isinstance(source, HTMLSource):
            articles = list(fetch_html_articles(source, limit, timeout))
        else:
            articles = list(fetch_rss_articles(source, limit, timeout))
    except Exception as e:
        logger.error("Failed to fetch articles from %s: %s", source.name, e)
        return SourceFetchResult(source=source.name, error=str(e))

    logger.info("Found %d articles from %s", len(articles), source.name)
    return SourceFetchResult(source=source.name, articles=articles)
