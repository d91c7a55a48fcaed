"""Tests for ingest_articles.sectionize module."""

from datetime import datetime, timezone

from ingest_articles.models import Article
from ingest_articles.sectionize import article_to_section, articles_to_sections

DATE = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _article(index: int, pub_date: str | None = "Mon, 01 Jan 2024 12:00:00 GMT") -> Article:
    return Article(
        id=f"id{index}",
        index=index,
        source="UP",
        title=f"Title {index}",
        link=f"https://up.example/{index}",
        pub_date=pub_date,
        published_at=DATE if pub_date else None,
        description="Summary",
        text=f"Title {index} Summary Body",
        date=DATE,
    )


class TestArticleToSection:
    def test_maps_fields(self) -> None:
        section = article_to_section(_article(3))

        assert section.id == "id3"
        assert section.text == "Title 3 Summary Body"
        assert section.index == 3
        assert section.metadata.index == 3
        assert section.metadata.title == "Title 3"
        assert section.metadata.source == "UP"
        assert section.metadata.link == "https://up.example/3"

    def test_to_dict_uses_wire_names(self) -> None:
        data = article_to_section(_article(0)).to_dict()

        assert data == {
            "id": "id0",
            "text": "Title 0 Summary Body",
            "index": 0,
            "metadata": {
                "title": "Title 0",
                "source": "UP",
                "link": "https://up.example/0",
                "pubDate": "Mon, 01 Jan 2024 12:00:00 GMT",
                "description": "Summary",
                "date": "2024-01-01T12:00:00+00:00",
                "index": 0,
            },
        }

    def test_missing_pub_date_serializes_as_none(self) -> None:
        data = article_to_section(_article(0, pub_date=None)).to_dict()
        assert data["metadata"]["pubDate"] is None


class TestArticlesToSections:
    def test_preserves_order_and_count(self) -> None:
        articles = [_article(2), _article(0), _article(1)]
        sections = articles_to_sections(articles)
        assert [s.id for s in sections] == ["id2", "id0", "id1"]

    def test_empty(self) -> None:
        assert articles_to_sections([]) == []
