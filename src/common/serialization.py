"""Serialization utilities."""

from dataclasses import asdict
from datetime import datetime
from typing import Any


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to a JSON-ready dict, converting datetimes to ISO strings."""
    return {key: _serialize_value(value) for key, value in asdict(obj).items()}


def _serialize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value
