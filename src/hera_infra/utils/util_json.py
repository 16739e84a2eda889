# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""JSON-safe conversion of database values."""

from __future__ import annotations

import datetime
import json
from decimal import Decimal
from uuid import UUID


def to_json_safe(value: object) -> object:
    """Convert a database value into a JSON-serializable value.

    UUIDs become strings, Decimals become floats, dates and datetimes become
    ISO 8601 strings. Containers are converted recursively.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_safe(v) for v in value]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def row_to_json_safe(row: object) -> dict[str, object]:
    """Convert an asyncpg Record (or mapping) into a JSON-safe dict."""
    return {str(k): to_json_safe(v) for k, v in dict(row).items()}  # type: ignore[call-overload]


def json_cell(value: object) -> str:
    """Render one CSV cell as a JSON literal; NULL renders as ``""``."""
    return json.dumps(to_json_safe(value) if value is not None else "")


__all__ = ["json_cell", "row_to_json_safe", "to_json_safe"]
