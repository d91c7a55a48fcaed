"""Response Pydantic models."""

from pydantic import BaseModel, Field


class NewsResponse(BaseModel):
    """Result of one ingest and dispatch cycle."""

    analyses_started: bool
    articles_count: int
    analysis_id: str | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None


class EventResponse(BaseModel):
    """A GDELT event row."""

    event_id: str
    sql_date: str
    actor1_name: str
    actor1_country_code: str
    actor2_name: str
    actor2_country_code: str
    event_code: str
    goldstein_scale: float | None = None
    avg_tone: float | None = None
    action_geo_full_name: str
    action_geo_country_code: str
    source_url: str


class EventsResponse(BaseModel):
    data: list[EventResponse] = Field(default_factory=list)


class ServiceHealth(BaseModel):
    healthy: bool
    status_code: int | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str  # "ok" or "degraded"
    analysis: ServiceHealth
    manuscript: ServiceHealth
