"""Source list loading.

A source list is a JSON document::

    {
      "name": "ukraine",
      "forceReanalysis": false,
      "rssSources": [{"name": "...", "url": "..."}],
      "htmlSources": [{"name": "...", "url": "...", "articleSelector": "...", "baseUrl": "..."}]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any

from ingest_articles.models import HTMLSource, RSSSource, SourceList

logger = logging.getLogger(__name__)


def load_source_list(path: Path | str, name: str | None = None) -> SourceList:
    """Load a source list from a JSON file.

    Args:
        path: Path to the JSON document
        name: Name to use when the document has none (defaults to the file stem)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is malformed
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid source list {path}: {exc}") from exc

    source_list = parse_source_list(data, name or path.stem)
    logger.info(
        "Loaded source list %s: %d RSS, %d HTML sources",
        source_list.name,
        len(source_list.rss_sources),
        len(source_list.html_sources),
    )
    return source_list


def parse_source_list(data: dict[str, Any], default_name: str) -> SourceList:
    """Parse a source list document into a SourceList."""
    if not isinstance(data, dict):
        raise ValueError("Source list must be a JSON object")

    rss_sources = [
        RSSSource(name=_require(item, "name"), url=_require(item, "url"))
        for item in data.get("rssSources", [])
    ]
    html_sources = [
        HTMLSource(
            name=_require(item, "name"),
            url=_require(item, "url"),
            article_selector=_require(item, "articleSelector"),
            base_url=item.get("baseUrl"),
        )
        for item in data.get("htmlSources", [])
    ]

    return SourceList(
        name=data.get("name") or default_name,
        rss_sources=rss_sources,
        html_sources=html_sources,
        force_reanalysis=bool(data.get("forceReanalysis", False)),
    )


def _require(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    if not value or not isinstance(value, str):
        raise ValueError(f"Source entry missing '{key}': {item}")
    return value
