"""HTML page scraping for sources without a feed."""

import logging
from itertools import islice
from typing import Iterator
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup, Tag

from ingest_articles.fetch_articles.errors import TransientFetchError
from ingest_articles.models import HTMLSource, RawArticle

logger = logging.getLogger(__name__)

USER_AGENT = "media-insights/1.0 (news reader)"


def fetch_html_articles(
    source: HTMLSource,
    limit: int = 10,
    timeout: float = 30,
) -> Iterator[RawArticle]:
    """Fetch a source page and yield the first `limit` elements matching its selector.

    Raises:
        TransientFetchError: If the page cannot be fetched or the selector is invalid.
    """
    try:
        response = requests.get(
            source.url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransientFetchError(source.url, str(e)) from e

    soup = BeautifulSoup(response.text, "html.parser")
    try:
        elements = soup.select(source.article_selector)
    except Exception as e:
        raise TransientFetchError(source.url, f"bad selector {source.article_selector!r}: {e}") from e

    base_url = source.base_url or _origin(source.url)

    for element in islice(elements, limit):
        article = _parse_element(element, source.name, base_url)
        if article is not None:
            yield article


def _parse_element(element: Tag, source: str, base_url: str) -> RawArticle | None:
    """Parse a matched element into a RawArticle."""
    title = element.get_text(" ", strip=True)
    if not title:
        return None

    href = _find_href(element)
    if not href:
        logger.debug("Skipping element without link from %s: %s", source, title)
        return None

    return RawArticle(
        source=source,
        title=title,
        link=resolve_link(href, base_url),
        pub_date=None,
        description="",
    )


def _find_href(element: Tag) -> str | None:
    href = element.get("href")
    if not href:
        anchor = element.find("a", href=True)
        href = anchor.get("href") if anchor is not None else None
    if isinstance(href, list):
        href = href[0] if href else None
    return href.strip() if href else None


def resolve_link(href: str, base_url: str) -> str:
    """Return href unchanged if absolute, else resolved against base_url."""
    if urlparse(href).scheme in ("http", "https"):
        return href
    return urljoin(base_url.rstrip("/") + "/", href)


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"
