import logging
from typing import Optional

import requests
import trafilatura
from readability import Document
from lxml import html as lxml_html

from ingest_articles.models import ExtractionResult

logger = logging.getLogger(__name__)

USER_AGENT = "media-insights/1.0 (news reader)"


def fetch_article_text(url: str, timeout: float = 10) -> ExtractionResult:
    """
    Fetch full article text from URL. Never raises.

    Order:
    1. trafilatura
    2. readability-lxml

    Each tried once. If both fail -> result with text None and the last error.
    """
    if not url:
        return ExtractionResult(text=None, method=None, error="No URL")

    error = "No text extracted"

    # 1. Try trafilatura
    try:
        text = fetch_with_trafilatura(url)
        if text:
            return ExtractionResult(text=text, method="trafilatura")
    except Exception as e:
        logger.warning("trafilatura failed for %s: %s", url, e)
        error = f"trafilatura: {e}"

    # 2. Fallback to readability
    try:
        text = fetch_with_readability(url, timeout)
        if text:
            return ExtractionResult(text=text, method="readability")
    except Exception as e:
        logger.warning("readability failed for %s: %s", url, e)
        error = f"readability: {e}"

    logger.warning("Failed to extract text from %s", url)
    return ExtractionResult(text=None, method=None, error=error)


def fetch_with_trafilatura(url: str) -> Optional[str]:
    downloaded = trafilatura.fetch_url(url)
    if not downloaded:
        return None
    return trafilatura.extract(downloaded)


def fetch_with_readability(url: str, timeout: float = 10) -> Optional[str]:
    response = requests.get(
        url,
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )
    response.raise_for_status()

    doc = Document(response.text)
    summary_html = doc.summary()

    tree = lxml_html.fromstring(summary_html)
    text = tree.text_content()

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return "\n".join(lines) if lines else None
