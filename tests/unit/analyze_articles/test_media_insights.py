"""Tests for analyze_articles.media_insights module."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest

from analyze_articles.analysed_files import AnalysedFilesClient
from analyze_articles.errors import AnalysedFilesError, AuthError, FailureCategory, RetryExhaustedError
from analyze_articles.media_insights import MediaInsightsRunner, build_file_id
from common.config import AppConfig, RetryConfig, SourceListConfig
from ingest_articles.models import Article, SourceList

DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _article(index: int) -> Article:
    return Article(
        id=f"id{index}",
        index=index,
        source="UP",
        title=f"T{index}",
        link=f"https://up.example/{index}",
        pub_date=None,
        published_at=None,
        description="",
        text=f"T{index}",
        date=DATE,
    )


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        retry=RetryConfig(max_retries=2, initial_delay=0),
        source_lists=[SourceListConfig(name="ukraine", path="sources/ukraine_media_sources.json")],
        check_previous_analyses=False,
    )


def _runner(config: AppConfig, dispatcher: Mock, files_client: Mock | None = None) -> MediaInsightsRunner:
    return MediaInsightsRunner(
        config,
        token_manager=Mock(),
        dispatcher=dispatcher,
        files_client=files_client or Mock(),
        clock=lambda: 1700000000.123,
    )


class TestBuildFileId:
    def test_format(self) -> None:
        assert build_file_id("ukraine", "media-insights", 1700000000123) == "ukraine-media-insights-1700000000123"


@patch("analyze_articles.media_insights.ingest_articles")
class TestMediaInsightsRunner:
    def test_dispatches_each_source_list(self, mock_ingest, config) -> None:
        mock_ingest.return_value = [_article(0), _article(1)]
        dispatcher = Mock()
        dispatcher.analyze.side_effect = [{"id": "a1"}, {"id": "a2"}]
        lists = [
            SourceList(name="ukraine", force_reanalysis=False),
            SourceList(name="russia", force_reanalysis=True),
        ]

        result = _runner(config, dispatcher).run(lists)

        assert result.analyses_started is True
        assert result.articles_count == 4
        assert result.analysis_id == "a1"
        assert [run.file_id for run in result.runs] == [
            "ukraine-media-insights-1700000000123",
            "russia-media-insights-1700000000123",
        ]

        first, second = dispatcher.analyze.call_args_list
        assert first.kwargs["force_reanalysis"] is False
        assert second.kwargs["force_reanalysis"] is True
        assert first.kwargs["analytics_type"] == "media-insights"
        assert first.kwargs["granularity"] == "article"
        assert [s.id for s in first.kwargs["sections"]] == ["id0", "id1"]

    def test_zero_articles_still_dispatched(self, mock_ingest, config) -> None:
        mock_ingest.return_value = []
        dispatcher = Mock()
        dispatcher.analyze.return_value = {"status": "queued"}

        result = _runner(config, dispatcher).run([SourceList(name="ukraine")])

        assert result.articles_count == 0
        assert result.analysis_id is None
        assert dispatcher.analyze.call_args.kwargs["sections"] == []

    def test_dispatch_retried_then_succeeds(self, mock_ingest, config) -> None:
        mock_ingest.return_value = [_article(0)]
        dispatcher = Mock()
        dispatcher.analyze.side_effect = [RuntimeError("503"), {"id": "a1"}]

        result = _runner(config, dispatcher).run([SourceList(name="ukraine")])

        assert result.analysis_id == "a1"
        assert dispatcher.analyze.call_count == 2

    def test_dispatch_exhaustion_propagates(self, mock_ingest, config) -> None:
        mock_ingest.return_value = [_article(0)]
        dispatcher = Mock()
        dispatcher.analyze.side_effect = RuntimeError("down")

        with pytest.raises(RetryExhaustedError, match="down"):
            _runner(config, dispatcher).run([SourceList(name="ukraine")])
        assert dispatcher.analyze.call_count == 2

    def test_auth_failure_propagates(self, mock_ingest, config) -> None:
        mock_ingest.return_value = []
        dispatcher = Mock()
        dispatcher.analyze.side_effect = AuthError("no token")

        with pytest.raises(RetryExhaustedError) as exc_info:
            _runner(config, dispatcher).run([SourceList(name="ukraine")])
        assert isinstance(exc_info.value.last_error, AuthError)

    def test_checks_previous_analyses_when_enabled(self, mock_ingest, config) -> None:
        config.check_previous_analyses = True
        mock_ingest.return_value = []
        files_client = Mock()
        files_client.fetch_prev_analysed_files_with_retry.return_value = [{}, {}]

        _runner(config, Mock(), files_client).run([SourceList(name="ukraine")])

        files_client.fetch_prev_analysed_files_with_retry.assert_called_once_with(2, 0)

    def test_loads_configured_source_lists(self, mock_ingest, config) -> None:
        mock_ingest.return_value = []
        dispatcher = Mock()
        dispatcher.analyze.return_value = {}

        result = _runner(config, dispatcher).run()

        assert [run.source_list for run in result.runs] == ["ukraine"]
        assert mock_ingest.call_args.args[0].name == "ukraine"

    def test_failed_previous_analyses_lookup_does_not_stop_dispatch(self, mock_ingest, config) -> None:
        config.check_previous_analyses = True
        mock_ingest.return_value = [_article(0)]
        files_client = Mock()
        files_client.fetch_prev_analysed_files_with_retry.side_effect = RetryExhaustedError(
            2, AnalysedFilesError(FailureCategory.SERVICE_UNAVAILABLE, "Service unavailable")
        )
        dispatcher = Mock()
        dispatcher.analyze.return_value = {"id": "a1"}

        result = _runner(config, dispatcher, files_client).run([SourceList(name="ukraine")])

        assert result.analysis_id == "a1"
        dispatcher.analyze.assert_called_once()

    def test_unconfigured_manuscript_service_fails_fast_and_run_continues(self, mock_ingest, config) -> None:
        config.check_previous_analyses = True
        mock_ingest.return_value = []
        token_manager = Mock()
        files_client = AnalysedFilesClient(None, token_manager, session=Mock())
        dispatcher = Mock()
        dispatcher.analyze.return_value = {"id": "a1"}
        with patch.object(
            files_client, "fetch_prev_analysed_files", wraps=files_client.fetch_prev_analysed_files
        ) as lookup:
            result = _runner(config, dispatcher, files_client).run([SourceList(name="ukraine")])

        assert result.analyses_started is True
        assert dispatcher.analyze.call_count == 1
        assert lookup.call_count == 1
        token_manager.get_token.assert_not_called()


class TestRunnerSession:
    def test_shared_session_passed_to_clients(self, config) -> None:
        config.analysis.base_url = "https://core.example"
        session = Mock()

        runner = MediaInsightsRunner(config, Mock(), session=session)

        assert runner.dispatcher.session is session
        assert runner.files_client.session is session
