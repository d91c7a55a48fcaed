"""Text cleaning for article fields."""

import html
import re
from typing import Optional


def clean_text(text: Optional[str]) -> Optional[str]:
    """Clean text by stripping HTML, unescaping entities, and collapsing whitespace."""
    if not text:
        return None
    # Strip HTML tags (keep text content)
    text = re.sub(r"<[^>]+>", " ", text)
    text = html.unescape(text)
    # Remove escaped quotes
    text = text.replace('\\"', '"')
    # Collapse whitespace
    text = re.sub(r"\s+", " ", text).strip()
    return text if text else None


def build_article_text(title: str, description: str, body: Optional[str]) -> str:
    """Join title, description and body text into one analysable string."""
    parts = [part.strip() for part in (title, description, body or "") if part and part.strip()]
    return " ".join(parts)
