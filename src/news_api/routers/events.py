"""GDELT event export endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.config import AppConfig, get_config
from common.serialization import serialize_dataclass
from fetch_events.fetch_events import fetch_daily_events
from news_api.models.responses import ErrorResponse, EventResponse, EventsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["events"])


@router.get(
    "/events",
    response_model=EventsResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_events(config: Annotated[AppConfig, Depends(get_config)]):
    """Yesterday's GDELT events involving the configured country."""
    events_cfg = config.events
    try:
        events = fetch_daily_events(
            actor_country_code=events_cfg.actor_country_code,
            geo_country_code=events_cfg.geo_country_code,
            base_url=events_cfg.base_url,
            timeout=events_cfg.timeout,
        )
    except Exception as e:
        logger.error("GDELT fetch failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return EventsResponse(data=[EventResponse(**serialize_dataclass(event)) for event in events])
