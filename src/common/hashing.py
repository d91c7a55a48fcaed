"""Hashing utilities."""

import hashlib


def generate_article_id(source: str, title: str, link: str) -> str:
    """Generate a stable article ID from source, title and link.

    Other fields (full text, dates) do not contribute, so the same headline
    re-served with freshly fetched text keeps its ID.
    """
    content = f"{source}|{title}|{link}"
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]
