"""Ingest, deduplicate and order articles from a source list."""

import logging
from datetime import datetime, timezone

from common.datetime import EPOCH, parse_published_date, resolve_date
from common.hashing import generate_article_id
from ingest_articles.clean_articles.clean import build_article_text
from ingest_articles.fetch_articles.fetch_article_text import (
    fetch_article_text as fetch_text,
)
from ingest_articles.fetch_articles.fetch_articles import fetch_source_articles
from ingest_articles.models import Article, RawArticle, SourceList

logger = logging.getLogger(__name__)


def ingest_articles(
    source_list: SourceList,
    max_items_per_source: int = 10,
    request_timeout: float = 10,
    fetched_at: datetime | None = None,
) -> list[Article]:
    """Fetch every source in the list and return deduplicated articles, newest first.

    Sources are processed one after another. A failing source contributes
    nothing; a failed text extraction leaves the article with title and
    description only. The first occurrence of an article ID wins.
    """
    sources = [*source_list.rss_sources, *source_list.html_sources]
    logger.info("Ingesting articles from %d sources (%s)", len(sources), source_list.name)

    fetched_at = fetched_at or datetime.now(timezone.utc)
    articles: list[Article] = []
    seen_ids: set[str] = set()
    duplicates = 0
    failed_sources = []

    for source in sources:
        result = fetch_source_articles(source, max_items_per_source, request_timeout)
        if not result.success:
            failed_sources.append(source.name)
            continue

        for raw in result.articles:
            article_id = generate_article_id(raw.source, raw.title, raw.link)
            if article_id in seen_ids:
                duplicates += 1
                continue

            articles.append(_build_article(raw, article_id, len(articles), fetched_at, request_timeout))
            seen_ids.add(article_id)

    if failed_sources:
        logger.warning("Skipped %d failed sources: %s", len(failed_sources), failed_sources)
    logger.info(
        "Ingested %d articles from %s (%d duplicates dropped)",
        len(articles),
        source_list.name,
        duplicates,
    )

    return sort_articles(articles)


def _build_article(
    raw: RawArticle,
    article_id: str,
    index: int,
    fetched_at: datetime,
    timeout: float,
) -> Article:
    extraction = fetch_text(raw.link, timeout)
    if not extraction.success:
        logger.warning("Using title and description only for %s: %s", raw.link, extraction.error)

    published_at = parse_published_date(raw.pub_date)

    return Article(
        id=article_id,
        index=index,
        source=raw.source,
        title=raw.title,
        link=raw.link,
        pub_date=raw.pub_date,
        published_at=published_at,
        description=raw.description,
        text=build_article_text(raw.title, raw.description, extraction.text),
        date=resolve_date(published_at, fetched_at),
    )


def sort_articles(articles: list[Article]) -> list[Article]:
    """Sort newest first; articles without a publish date go last, order otherwise kept."""
    return sorted(articles, key=lambda a: (a.published_at is not None, a.published_at or EPOCH), reverse=True)
