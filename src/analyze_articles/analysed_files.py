"""Client for the manuscript management service's analysed-files archive."""

from __future__ import annotations

import logging
from typing import Any

import requests

from analyze_articles.errors import AnalysedFilesError, FailureCategory
from analyze_articles.health import HealthStatus, check_api_health
from analyze_articles.retry import fetch_with_retry
from analyze_articles.token_manager import TokenManager

logger = logging.getLogger(__name__)


class AnalysedFilesClient:
    """Queries previously analysed files with a bearer token."""

    def __init__(
        self,
        base_url: str | None,
        token_manager: TokenManager,
        timeout: float = 30,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.token_manager = token_manager
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_prev_analysed_files(self) -> Any:
        """Return the JSON description of all prior analyses.

        Raises:
            AuthError: If no token could be obtained.
            AnalysedFilesError: If the base URL is missing or the request fails.
        """
        if not self.base_url:
            raise AnalysedFilesError(
                FailureCategory.REQUEST_ERROR,
                "MANUSCRIPT_MGMT_BASE environment variable is not defined",
            )

        token = self.token_manager.get_token()
        url = f"{self.base_url}/analytics-json-all"

        logger.info("Fetching previously analysed files from %s", url)
        try:
            response = self.session.get(
                url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            error = AnalysedFilesError.from_request_exception(e, url)
            logger.error(
                "Error fetching previously analysed files (%s, status=%s): %s",
                error.category.value,
                error.status_code,
                error,
            )
            raise error from e

        try:
            return response.json()
        except ValueError as e:
            raise AnalysedFilesError(
                FailureCategory.HTTP_ERROR,
                f"Invalid JSON response from {url}: {e}",
                status_code=response.status_code,
                url=url,
            ) from e

    def fetch_prev_analysed_files_with_retry(
        self,
        max_retries: int = 3,
        initial_delay: float = 1.0,
    ) -> Any:
        return fetch_with_retry(self.fetch_prev_analysed_files, max_retries, initial_delay)

    def check_health(self, timeout: float = 5) -> HealthStatus:
        if not self.base_url:
            return HealthStatus(healthy=False, error="MANUSCRIPT_MGMT_BASE not configured")
        return check_api_health(self.base_url, self.token_manager, self.session, timeout)
