"""News ingestion and analysis endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.config import AppConfig, get_config
from news_api.dependencies import build_runner
from news_api.models.responses import ErrorResponse, NewsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["news"])


@router.get(
    "/news",
    response_model=NewsResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
def get_news(config: Annotated[AppConfig, Depends(get_config)]):
    """Ingest every configured source list and submit each one for analysis."""
    try:
        result = build_runner(config).run()
    except Exception as e:
        logger.error("Analysis error: %s", e, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Analysis failed", "message": str(e)},
        )

    return NewsResponse(
        analyses_started=result.analyses_started,
        articles_count=result.articles_count,
        analysis_id=result.analysis_id,
    )
