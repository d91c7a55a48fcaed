"""Helper functions for ingest_articles CLI."""

from __future__ import annotations

import argparse
import logging

from common.config import AppConfig, SourceListConfig

logger = logging.getLogger(__name__)


def parse_source_lists(value: str | None, config: AppConfig) -> list[SourceListConfig]:
    '''Parse the --source-lists argument into configured source lists.'''

    configured = {item.name: item for item in config.source_lists}

    # If no value is provided or if "all" is specified, return all source lists
    if not value or value.strip().lower() == "all":
        return list(config.source_lists)

    parsed = [s.strip() for s in value.split(",") if s.strip() and s.strip().lower() != "all"]

    # Log any invalid source lists
    for name in parsed:
        if name not in configured:
            logger.warning("Invalid source list: %s", name)

    selected = [configured[name] for name in parsed if name in configured]

    # Raise an error if no valid source lists were provided
    if not selected:
        raise ValueError(f"No valid source lists provided. Valid source lists: {', '.join(sorted(configured))}")

    return selected


def parse_ingest_articles_args() -> argparse.Namespace:
    '''Parse CLI arguments for ingest_articles.'''

    parser = argparse.ArgumentParser(description="Ingest news articles and optionally submit them for analysis")
    parser.add_argument("--config", default=None, help="Config name (default: $PIPELINE_CONFIG or prod)")
    parser.add_argument(
        "--source-lists",
        default=None,
        help="Comma-separated list of source lists (default: all).",
    )
    parser.add_argument("--max-items", type=int, default=None, help="Items per source (default: from config)")
    parser.add_argument("--analyze", action="store_true", help="Submit sections to the analysis service")
    parser.add_argument("--load-local", action="store_true", help="Save articles as JSONL under output/")
    return parser.parse_args()
