"""One full ingest -> sectionize -> dispatch cycle over the configured source lists."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import requests

from analyze_articles.analysed_files import AnalysedFilesClient
from analyze_articles.analyze import AnalysisDispatcher
from analyze_articles.errors import AuthError, RetryExhaustedError, ServiceError
from analyze_articles.retry import fetch_with_retry
from analyze_articles.token_manager import TokenManager
from common.config import AppConfig
from ingest_articles.fetch_articles.sources import load_source_list
from ingest_articles.ingest_articles import ingest_articles
from ingest_articles.models import SourceList
from ingest_articles.sectionize import articles_to_sections

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRun:
    """Outcome of dispatching one source list."""
    source_list: str
    file_id: str
    articles_count: int
    result: Any


@dataclass
class NewsRunResult:
    analyses_started: bool
    articles_count: int
    analysis_id: str | None = None
    runs: list[AnalysisRun] = field(default_factory=list)


def build_file_id(source_list_name: str, analytics_type: str, now_ms: int) -> str:
    return f"{source_list_name}-{analytics_type}-{now_ms}"


def _result_id(result: Any) -> str | None:
    if isinstance(result, dict) and result.get("id") is not None:
        return str(result["id"])
    return None


class MediaInsightsRunner:
    """Runs the media insights pipeline for every configured source list."""

    def __init__(
        self,
        config: AppConfig,
        token_manager: TokenManager,
        dispatcher: AnalysisDispatcher | None = None,
        files_client: AnalysedFilesClient | None = None,
        clock: Callable[[], float] = time.time,
        session: requests.Session | None = None,
    ):
        self.config = config
        self.dispatcher = dispatcher or AnalysisDispatcher(
            config.analysis.base_url,
            token_manager,
            timeout=config.analysis.timeout,
            session=session,
        )
        self.files_client = files_client or AnalysedFilesClient(
            config.manuscript.base_url,
            token_manager,
            timeout=config.manuscript.timeout,
            session=session,
        )
        self._clock = clock

    def load_source_lists(self) -> list[SourceList]:
        return [
            load_source_list(self.config.source_list_path(item), name=item.name)
            for item in self.config.source_lists
        ]

    def run(self, source_lists: list[SourceList] | None = None) -> NewsRunResult:
        """Ingest and dispatch each source list. Errors from auth or dispatch propagate."""
        if self.config.check_previous_analyses:
            self._log_previous_analyses()

        if source_lists is None:
            source_lists = self.load_source_lists()

        runs = [self.run_source_list(source_list) for source_list in source_lists]

        result_ids = [_result_id(run.result) for run in runs]
        analysis_id = next((result_id for result_id in result_ids if result_id), None)
        return NewsRunResult(
            analyses_started=True,
            articles_count=sum(run.articles_count for run in runs),
            analysis_id=analysis_id,
            runs=runs,
        )

    def run_source_list(self, source_list: SourceList) -> AnalysisRun:
        ingest_cfg = self.config.ingest
        analysis_cfg = self.config.analysis
        retry_cfg = self.config.retry

        articles = ingest_articles(
            source_list,
            max_items_per_source=ingest_cfg.max_items_per_source,
            request_timeout=ingest_cfg.request_timeout,
        )
        logger.info("Fetched %d %s articles total", len(articles), source_list.name)

        sections = articles_to_sections(articles)
        file_id = build_file_id(source_list.name, analysis_cfg.analytics_type, int(self._clock() * 1000))

        result = fetch_with_retry(
            lambda: self.dispatcher.analyze(
                analytics_type=analysis_cfg.analytics_type,
                file_id=file_id,
                sections=sections,
                force_reanalysis=source_list.force_reanalysis,
                granularity=analysis_cfg.granularity,
            ),
            retry_cfg.max_retries,
            retry_cfg.initial_delay,
        )
        logger.info("Analysis started for %s (fileId=%s)", source_list.name, file_id)

        return AnalysisRun(
            source_list=source_list.name,
            file_id=file_id,
            articles_count=len(sections),
            result=result,
        )

    def _log_previous_analyses(self) -> None:
        """Log how many files were analysed before. A failed lookup does not stop the run."""
        retry_cfg = self.config.retry
        try:
            previous = self.files_client.fetch_prev_analysed_files_with_retry(
                retry_cfg.max_retries,
                retry_cfg.initial_delay,
            )
        except (AuthError, ServiceError, RetryExhaustedError) as e:
            logger.warning("Could not fetch previously analysed files: %s", e)
            return

        count = len(previous) if isinstance(previous, (list, dict)) else 0
        logger.info("Found %d previously analysed files", count)
