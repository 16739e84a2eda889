# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Typed values of core_dynamic_data rows.

Each dynamic-data row stores its value in exactly one of ``value_text``,
``value_number``, ``value_boolean``, ``value_date`` or ``value_json``, chosen
by ``value_type``. ``decode_dynamic_value`` maps a row to one variant of the
closed ``DynamicValue`` union; an unrecognized ``value_type`` decodes to
``DynamicUnknown`` so data-entry mistakes stay visible instead of flattening
to null.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from hera_infra.enums import EnumDynamicValueType
from hera_infra.utils import to_json_safe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DynamicText:
    value: str | None

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class DynamicNumber:
    value: float | None

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class DynamicBool:
    value: bool | None

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class DynamicDate:
    """ISO 8601 date or timestamp string."""

    value: str | None

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class DynamicJson:
    value: Any

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class DynamicUnknown:
    """A row whose ``value_type`` is not one of the known types."""

    value_type: str | None

    def to_python(self) -> object:
        return None


DynamicValue = (
    DynamicText | DynamicNumber | DynamicBool | DynamicDate | DynamicJson | DynamicUnknown
)


def _decode_json(raw: object) -> object:
    # asyncpg returns json/jsonb as text unless a codec is registered
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
    return to_json_safe(raw)


def _decode_number(raw: object) -> float | None:
    if raw is None:
        return None
    safe = to_json_safe(raw)
    if isinstance(safe, bool):
        return float(safe)
    if isinstance(safe, (int, float)):
        return safe  # type: ignore[return-value]
    try:
        return float(str(safe))
    except ValueError:
        return None


def decode_dynamic_value(row: Mapping[str, Any]) -> DynamicValue:
    """Select the typed value column of a dynamic-data row by its value_type."""
    raw_type = row.get("value_type")
    try:
        value_type = EnumDynamicValueType(raw_type)
    except ValueError:
        return DynamicUnknown(value_type=None if raw_type is None else str(raw_type))

    if value_type is EnumDynamicValueType.TEXT:
        text = row.get("value_text")
        return DynamicText(None if text is None else str(text))
    if value_type is EnumDynamicValueType.NUMBER:
        return DynamicNumber(_decode_number(row.get("value_number")))
    if value_type is EnumDynamicValueType.BOOLEAN:
        flag = row.get("value_boolean")
        return DynamicBool(None if flag is None else bool(flag))
    if value_type is EnumDynamicValueType.DATE:
        date_value = to_json_safe(row.get("value_date"))
        return DynamicDate(None if date_value is None else str(date_value))
    return DynamicJson(_decode_json(row.get("value_json")))


def flatten_dynamic_rows(
    rows: Iterable[Mapping[str, Any]],
    entity_ids: Iterable[object],
) -> tuple[dict[str, dict[str, object]], list[dict[str, object]]]:
    """Group dynamic-data rows into ``{entity_id: {key: value}}``.

    Every id in ``entity_ids`` gets an entry, empty when it has no rows.

    Returns:
        The per-entity map and a list of ``{entity_id, key, value_type}``
        records for rows whose value_type was not recognized.
    """
    by_entity: dict[str, dict[str, object]] = {str(eid): {} for eid in entity_ids}
    unknown: list[dict[str, object]] = []
    for row in rows:
        entity_id = str(to_json_safe(row.get("entity_id")))
        key = row.get("key")
        if key is None:
            continue
        decoded = decode_dynamic_value(row)
        if isinstance(decoded, DynamicUnknown):
            logger.warning(
                "Unknown dynamic value_type",
                extra={
                    "entity_id": entity_id,
                    "key": key,
                    "value_type": decoded.value_type,
                },
            )
            unknown.append(
                {"entity_id": entity_id, "key": key, "value_type": decoded.value_type}
            )
        by_entity.setdefault(entity_id, {})[str(key)] = decoded.to_python()
    return by_entity, unknown


__all__ = [
    "DynamicBool",
    "DynamicDate",
    "DynamicJson",
    "DynamicNumber",
    "DynamicText",
    "DynamicUnknown",
    "DynamicValue",
    "decode_dynamic_value",
    "flatten_dynamic_rows",
]
