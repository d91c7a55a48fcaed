"""CLI for ingesting articles and submitting them for analysis."""

from __future__ import annotations

import logging

from analyze_articles.media_insights import MediaInsightsRunner
from analyze_articles.token_manager import TokenManager
from common.cli_helpers import setup_logging
from common.config import load_config
from common.local_io import save_jsonl_records_local
from ingest_articles.fetch_articles.sources import load_source_list
from ingest_articles.helpers import parse_ingest_articles_args, parse_source_lists
from ingest_articles.ingest_articles import ingest_articles

logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_ingest_articles_args()
    setup_logging()

    config = load_config(args.config)
    if args.max_items is not None:
        config.ingest.max_items_per_source = args.max_items

    source_lists = [
        load_source_list(config.source_list_path(item), name=item.name)
        for item in parse_source_lists(args.source_lists, config)
    ]

    if args.analyze:
        runner = MediaInsightsRunner(config, TokenManager.from_config(config.auth))
        result = runner.run(source_lists)
        for run in result.runs:
            logger.info("Submitted %d sections for %s as %s", run.articles_count, run.source_list, run.file_id)
        return

    for source_list in source_lists:
        articles = ingest_articles(
            source_list,
            max_items_per_source=config.ingest.max_items_per_source,
            request_timeout=config.ingest.request_timeout,
        )
        if not articles:
            logger.warning("No articles ingested for %s", source_list.name)
            continue

        logger.info("Ingested %d articles for %s", len(articles), source_list.name)
        if args.load_local:
            save_jsonl_records_local(articles, f"{source_list.name}_articles")


if __name__ == "__main__":
    main()
