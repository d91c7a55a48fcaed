"""CLI for fetching and filtering the daily GDELT event export."""

import argparse
import logging

from common.cli_helpers import parse_date, setup_logging
from common.config import load_config
from common.local_io import save_jsonl_records_local
from fetch_events.fetch_events import fetch_daily_events

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch GDELT events for one day")
    parser.add_argument("--config", default=None, help="Config name (default: $PIPELINE_CONFIG or prod)")
    parser.add_argument("--date", type=parse_date, default=None, help="Export date YYYY-MM-DD (default: yesterday)")
    parser.add_argument("--output-dir", default="output")
    args = parser.parse_args()

    setup_logging()
    config = load_config(args.config)
    events_cfg = config.events

    events = fetch_daily_events(
        day=args.date,
        actor_country_code=events_cfg.actor_country_code,
        geo_country_code=events_cfg.geo_country_code,
        base_url=events_cfg.base_url,
        timeout=events_cfg.timeout,
    )
    if not events:
        logger.warning("No matching events")
        return

    save_jsonl_records_local(events, "gdelt_events", args.output_dir)


if __name__ == "__main__":
    main()
