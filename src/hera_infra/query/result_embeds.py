# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Result post-processor for hera.select and hera.report.run.

Embeds are optional follow-up queries run on the same session as the primary
query. Each one binds the primary query's organization parameter as ``$1``,
so enrichment can never reach rows of another tenant. Finding no related rows
is a normal result (empty list or map), not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from hera_infra.models import ModelEmbedFlags
from hera_infra.protocols import ProtocolDbSession
from hera_infra.query.dynamic_values import flatten_dynamic_rows
from hera_infra.query.whitelist_registry import (
    CORE_ENTITIES,
    UNIVERSAL_TRANSACTION_LINES,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCALE: str = "default"
DISPLAY_LABEL_RELATIONSHIP: str = "DISPLAY_LABEL_FOR_TYPE"

TRANSACTION_LINES_SQL: str = (
    f"SELECT {', '.join(sorted(UNIVERSAL_TRANSACTION_LINES.allowed_columns))}"
    " FROM universal_transaction_lines"
    " WHERE organization_id = $1 AND transaction_id = ANY($2)"
    " ORDER BY transaction_id, line_number"
)

DYNAMIC_DATA_SQL: str = (
    "SELECT entity_id, key, value_type, value_text, value_number,"
    " value_boolean, value_date, value_json"
    " FROM core_dynamic_data"
    " WHERE organization_id = $1 AND entity_id = ANY($2)"
    " ORDER BY entity_id, key"
)

DISPLAY_LABELS_SQL: str = (
    "SELECT COALESCE(r.relationship_data->>'entity_type_code', e.entity_code)"
    " AS entity_type_code,"
    " COALESCE(r.relationship_data->>'locale', 'default') AS locale,"
    " COALESCE(e.metadata->>'singular', e.entity_name) AS singular,"
    " COALESCE(e.metadata->>'plural', e.entity_name) AS plural"
    " FROM core_relationships r"
    " JOIN core_entities e"
    " ON e.id = r.to_entity_id AND e.organization_id = r.organization_id"
    " WHERE r.organization_id = $1"
    f" AND r.relationship_type = '{DISPLAY_LABEL_RELATIONSHIP}'"
    " AND r.is_active = true"
)


def _row_ids(rows: Sequence[dict[str, Any]]) -> list[object]:
    """Return the primary ids, or an empty list when any row lacks ``id``."""
    if not rows or not all("id" in row for row in rows):
        return []
    return [row["id"] for row in rows]


async def embed_transaction_lines(
    session: ProtocolDbSession,
    rows: list[dict[str, Any]],
    org_param: object,
) -> int | None:
    """Nest transaction lines onto each row as ``row['lines']``.

    Returns:
        Number of line rows fetched, or None when the primary rows carry no
        ids and the embed was skipped.
    """
    ids = _row_ids(rows)
    if not ids:
        return None
    result = await session.fetch(TRANSACTION_LINES_SQL, (org_param, ids))
    by_parent: dict[str, list[dict[str, Any]]] = {}
    for line in result.rows:
        by_parent.setdefault(str(line.get("transaction_id")), []).append(line)
    for row in rows:
        row["lines"] = by_parent.get(str(row["id"]), [])
    return result.row_count


async def embed_entity_dynamic_data(
    session: ProtocolDbSession,
    rows: list[dict[str, Any]],
    org_param: object,
) -> tuple[int, list[dict[str, object]]] | None:
    """Attach flattened dynamic fields to each entity as ``row['dynamic_data']``.

    Returns:
        ``(dynamic row count, unknown value_type records)``, or None when the
        embed was skipped.
    """
    ids = _row_ids(rows)
    if not ids:
        return None
    result = await session.fetch(DYNAMIC_DATA_SQL, (org_param, ids))
    by_entity, unknown = flatten_dynamic_rows(result.rows, ids)
    for row in rows:
        row["dynamic_data"] = by_entity.get(str(row["id"]), {})
    return result.row_count, unknown


async def fetch_display_labels(
    session: ProtocolDbSession,
    org_param: object,
) -> dict[str, dict[str, dict[str, Any]]]:
    """Return ``{entity_type_code: {locale: {singular, plural}}}`` for the organization."""
    result = await session.fetch(DISPLAY_LABELS_SQL, (org_param,))
    labels: dict[str, dict[str, dict[str, Any]]] = {}
    for row in result.rows:
        code = row.get("entity_type_code")
        if not code:
            continue
        locale = row.get("locale") or DEFAULT_LOCALE
        labels.setdefault(str(code), {})[str(locale)] = {
            "singular": row.get("singular"),
            "plural": row.get("plural"),
        }
    return labels


def labels_for_locale(
    labels: dict[str, dict[str, dict[str, Any]]],
    locale: str,
) -> dict[str, dict[str, Any]]:
    """Pick one locale per entity type, falling back to ``default``.

    Entity types with neither the requested nor the default locale are omitted.
    """
    picked: dict[str, dict[str, Any]] = {}
    for code, by_locale in labels.items():
        entry = by_locale.get(locale) or by_locale.get(DEFAULT_LOCALE)
        if entry is not None:
            picked[code] = entry
    return picked


async def apply_embeds(
    session: ProtocolDbSession,
    table: str,
    rows: list[dict[str, Any]],
    org_param: object,
    embed: ModelEmbedFlags,
) -> dict[str, Any]:
    """Run the requested embeds and return the metadata they contribute.

    ``rows`` is mutated in place. Dynamic data is only embedded when the
    primary table is ``core_entities``.
    """
    meta: dict[str, Any] = {}

    if embed.lines_for_transactions:
        line_count = await embed_transaction_lines(session, rows, org_param)
        if line_count is not None:
            meta["lines"] = line_count

    if embed.entity_dynamic_data and table == CORE_ENTITIES.table_name:
        dynamic = await embed_entity_dynamic_data(session, rows, org_param)
        if dynamic is not None:
            meta["dynamic_data"], unknown = dynamic
            if unknown:
                meta["dynamic_data_unknown"] = unknown

    if embed.display_labels:
        meta["display_labels"] = await fetch_display_labels(session, org_param)

    return meta


__all__ = [
    "DEFAULT_LOCALE",
    "DISPLAY_LABELS_SQL",
    "DYNAMIC_DATA_SQL",
    "TRANSACTION_LINES_SQL",
    "apply_embeds",
    "embed_entity_dynamic_data",
    "embed_transaction_lines",
    "fetch_display_labels",
    "labels_for_locale",
]
