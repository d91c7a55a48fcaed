"""Dispatch sections to the external analysis service."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import requests

from analyze_articles.errors import DispatchError, FailureCategory
from analyze_articles.health import HealthStatus, check_api_health
from analyze_articles.token_manager import TokenManager
from ingest_articles.models import Section

logger = logging.getLogger(__name__)


def build_analyze_request(
    analytics_type: str,
    file_id: str,
    sections: Sequence[Section],
    force_reanalysis: bool,
    granularity: str,
) -> dict[str, Any]:
    """Build the JSON body for an analyze call."""
    return {
        "analyticsType": analytics_type,
        "fileId": file_id,
        "sections": [section.to_dict() for section in sections],
        "forceReanalysis": force_reanalysis,
        "options": {
            "granularity": granularity,
        },
    }


class AnalysisDispatcher:
    """Authenticated client for the analysis service's profiling endpoint."""

    def __init__(
        self,
        base_url: str,
        token_manager: TokenManager,
        timeout: float = 120,
        session: requests.Session | None = None,
    ):
        if not base_url:
            raise ValueError("CORE_BASE_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.token_manager = token_manager
        self.timeout = timeout
        self.session = session or requests.Session()

    def analyze(
        self,
        analytics_type: str,
        file_id: str,
        sections: Sequence[Section],
        force_reanalysis: bool,
        granularity: str,
    ) -> Any:
        """Submit sections for analysis and return the service's JSON response.

        Raises:
            AuthError: If no token could be obtained.
            DispatchError: If the request fails or the service returns non-2xx.
        """
        token = self.token_manager.get_token()
        url = f"{self.base_url}/profiling/{analytics_type}/analyze"
        body = build_analyze_request(analytics_type, file_id, sections, force_reanalysis, granularity)

        logger.info("Submitting %d sections to %s (fileId=%s)", len(sections), url, file_id)
        try:
            response = self.session.post(
                url,
                json=body,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            error = DispatchError.from_request_exception(e, url)
            logger.error("Error calling analyze API: %s", error)
            raise error from e

        try:
            return response.json()
        except ValueError as e:
            raise DispatchError(
                FailureCategory.HTTP_ERROR,
                f"Invalid JSON response from {url}: {e}",
                status_code=response.status_code,
                url=url,
            ) from e

    def health_check(self, timeout: float = 5) -> HealthStatus:
        return check_api_health(self.base_url, self.token_manager, self.session, timeout)
