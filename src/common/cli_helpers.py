"""Shared helpers for the command-line entry points."""

from __future__ import annotations

import argparse
import logging
from datetime import date

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logging for CLI tools and the API server."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_date(value: str, field_name: str = "date") -> date:
    """argparse type for YYYY-MM-DD values (e.g. the GDELT export day)."""
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be YYYY-MM-DD, got {value!r}") from exc
