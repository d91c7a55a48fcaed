"""Lightweight authenticated liveness probes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from analyze_articles.errors import AuthError
from analyze_articles.token_manager import TokenManager

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    healthy: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


def check_api_health(
    base_url: str | None,
    token_manager: TokenManager,
    session: requests.Session | None = None,
    timeout: float = 5,
) -> HealthStatus:
    """Probe `{base_url}/health` with a bearer token. Never raises."""
    if not base_url:
        return HealthStatus(healthy=False, error="Base URL not configured")

    if session is None:
        with requests.Session() as own_session:
            return check_api_health(base_url, token_manager, own_session, timeout)

    try:
        token = token_manager.get_token()
        response = session.get(
            f"{base_url}/health",
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )
        response.raise_for_status()
    except (AuthError, requests.RequestException) as e:
        response = getattr(e, "response", None)
        status_code = response.status_code if response is not None else None
        logger.warning("Health check failed for %s: %s", base_url, e)
        return HealthStatus(healthy=False, status_code=status_code, error=str(e))

    return HealthStatus(healthy=True, status_code=response.status_code)
