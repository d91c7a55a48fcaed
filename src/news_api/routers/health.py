"""Health endpoint for liveness checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from analyze_articles.analysed_files import AnalysedFilesClient
from analyze_articles.errors import AuthError
from analyze_articles.health import HealthStatus, check_api_health
from common.config import AppConfig, get_config
from news_api.dependencies import get_session, get_token_manager
from news_api.models.responses import HealthResponse, ServiceHealth

router = APIRouter(tags=["health"])


def _to_response(status: HealthStatus) -> ServiceHealth:
    return ServiceHealth(healthy=status.healthy, status_code=status.status_code, error=status.error)


@router.get("/health", response_model=HealthResponse)
def health(config: Annotated[AppConfig, Depends(get_config)]):
    """Probe the analysis and manuscript services. Never fails."""
    try:
        token_manager = get_token_manager()
    except AuthError as e:
        unavailable = ServiceHealth(healthy=False, error=str(e))
        return HealthResponse(status="degraded", analysis=unavailable, manuscript=unavailable)

    session = get_session()
    analysis = check_api_health(config.analysis.base_url, token_manager, session)
    manuscript = AnalysedFilesClient(config.manuscript.base_url, token_manager, session=session).check_health()

    status = "ok" if analysis.healthy and manuscript.healthy else "degraded"
    return HealthResponse(
        status=status,
        analysis=_to_response(analysis),
        manuscript=_to_response(manuscript),
    )
