"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from common.serialization import serialize_dataclass

logger = logging.getLogger(__name__)


def save_jsonl_records_local(
    records: list[Any],
    prefix: str,
    output_dir: str = "output",
) -> Path:
    """
    Save a list of dataclass records to a local JSONL file.

    Args:
        records: List of dataclass objects to save
        prefix: Filename prefix (e.g., "ukraine_articles")
        output_dir: Directory to save to (default: "output")

    Returns:
        Path to the created file.
    """
    now = datetime.now(timezone.utc)
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    filepath = output_path / f"{prefix}_{now.strftime('%Y_%m_%d_%H_%M')}.jsonl"

    with filepath.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(serialize_dataclass(record), ensure_ascii=False) + "\n")

    logger.info("Saved %d records to %s", len(records), filepath)
    return filepath
