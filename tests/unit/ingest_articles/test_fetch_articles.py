"""Tests for ingest_articles.fetch_articles.fetch_articles module."""

from unittest.mock import patch

from ingest_articles.fetch_articles.errors import TransientFetchError
from ingest_articles.fetch_articles.fetch_articles import fetch_source_articles
from ingest_articles.models import HTMLSource, RawArticle, RSSSource

RSS = RSSSource(name="feed", url="https://feed.example/rss")
HTML = HTMLSource(name="page", url="https://page.example", article_selector="h2 a")


def _raw(source: str, n: int) -> RawArticle:
    return RawArticle(source=source, title=f"Title {n}", link=f"https://x.example/{n}")


class TestFetchSourceArticles:
    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_html_articles")
    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_rss_articles")
    def test_rss_source_uses_rss_fetcher(self, mock_rss, mock_html) -> None:
        mock_rss.return_value = iter([_raw("feed", 1), _raw("feed", 2)])

        result = fetch_source_articles(RSS, limit=5, timeout=10)

        assert result.success
        assert result.source == "feed"
        assert len(result.articles) == 2
        mock_rss.assert_called_once_with(RSS, 5, 10)
        mock_html.assert_not_called()

    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_html_articles")
    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_rss_articles")
    def test_html_source_uses_html_fetcher(self, mock_rss, mock_html) -> None:
        mock_html.return_value = iter([_raw("page", 1)])

        result = fetch_source_articles(HTML, limit=5, timeout=10)

        assert result.articles == [_raw("page", 1)]
        mock_html.assert_called_once_with(HTML, 5, 10)
        mock_rss.assert_not_called()

    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_rss_articles")
    def test_failure_is_contained(self, mock_rss) -> None:
        mock_rss.side_effect = TransientFetchError(RSS.url, "timed out")

        result = fetch_source_articles(RSS, limit=5, timeout=10)

        assert not result.success
        assert result.articles == []
        assert "timed out" in result.error

    @patch("ingest_articles.fetch_articles.fetch_articles.fetch_rss_articles")
    def test_failure_mid_iteration_discards_partial_results(self, mock_rss) -> None:
        def failing():
            yield _raw("feed", 1)
            raise TransientFetchError(RSS.url, "connection reset")

        mock_rss.return_value = failing()

        result = fetch_source_articles(RSS, limit=5, timeout=10)

        assert not result.success
        assert result.articles == []
