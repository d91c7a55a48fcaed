"""Shared dependencies for the API routers."""

import requests

from analyze_articles.media_insights import MediaInsightsRunner
from analyze_articles.token_manager import TokenManager
from common.config import AppConfig, ConfigSingleton, get_config

# One HTTP connection pool per process, reused by every outbound client
_session: ConfigSingleton[requests.Session] = ConfigSingleton(requests.Session)
get_session = _session.get
set_session = _session.set
reset_session = _session.reset

# One token cache per process, created on first use
_token_manager: ConfigSingleton[TokenManager] = ConfigSingleton(
    lambda: TokenManager.from_config(get_config().auth, session=get_session())
)
get_token_manager = _token_manager.get
set_token_manager = _token_manager.set
reset_token_manager = _token_manager.reset


def build_runner(config: AppConfig) -> MediaInsightsRunner:
    """Build a pipeline runner sharing the process-wide token manager and session."""
    return MediaInsightsRunner(config, get_token_manager(), session=get_session())
