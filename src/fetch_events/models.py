"""Data models for fetch_events."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GdeltEvent:
    """One row of the GDELT 1.0 daily event export."""
    event_id: str
    sql_date: str
    actor1_name: str
    actor1_country_code: str
    actor2_name: str
    actor2_country_code: str
    event_code: str
    goldstein_scale: Optional[float]
    avg_tone: Optional[float]
    action_geo_full_name: str
    action_geo_country_code: str
    source_url: str
