# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Stored configuration rules.

Rules live in the universal tables: one ``core_entities`` row of
``entity_type = 'CONFIG_RULE'`` per rule, with its fields in
``core_dynamic_data`` (``config_key``, ``rule_type``, ``priority``,
``conditions``, ``config_value``). They are flattened with the same typed
dynamic-value decoding as the ``entity_dynamic_data`` embed.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from hera_infra.models import ModelConfigRule
from hera_infra.protocols import ProtocolDbSession
from hera_infra.query.dynamic_values import flatten_dynamic_rows
from hera_infra.query.result_embeds import DYNAMIC_DATA_SQL

logger = logging.getLogger(__name__)

CONFIG_RULE_ENTITY_TYPE: str = "CONFIG_RULE"

CONFIG_RULE_ENTITIES_SQL: str = (
    "SELECT id FROM core_entities"
    " WHERE organization_id = $1"
    f" AND entity_type = '{CONFIG_RULE_ENTITY_TYPE}'"
    " AND coalesce(status, 'active') = 'active'"
    " ORDER BY created_at, id"
)


def _decode_conditions(raw: object) -> object:
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError:
            return None
    return raw


def rule_from_fields(entity_id: str, fields: dict[str, Any]) -> ModelConfigRule | None:
    """Build a rule from one entity's flattened dynamic fields.

    Returns None, with a warning, when the stored fields do not form a valid
    rule.
    """
    try:
        return ModelConfigRule(
            config_key=str(fields.get("config_key") or ""),
            rule_type=fields.get("rule_type") or "conditional",
            priority=fields.get("priority") or 0,
            conditions=_decode_conditions(fields.get("conditions")),
            config_value=fields.get("config_value"),
        )
    except ValidationError:
        logger.warning(
            "Skipping malformed stored configuration rule",
            extra={"entity_id": entity_id},
        )
        return None


async def load_stored_rules(
    session: ProtocolDbSession,
    org_param: object,
    config_key: str,
) -> list[ModelConfigRule]:
    """Materialize the organization's stored rules for ``config_key``."""
    entities = await session.fetch(CONFIG_RULE_ENTITIES_SQL, (org_param,))
    ids = [row["id"] for row in entities.rows if row.get("id") is not None]
    if not ids:
        return []
    dynamic = await session.fetch(DYNAMIC_DATA_SQL, (org_param, ids))
    by_entity, _unknown = flatten_dynamic_rows(dynamic.rows, ids)

    rules: list[ModelConfigRule] = []
    for entity_id in (str(i) for i in ids):
        fields = by_entity.get(entity_id, {})
        if fields.get("config_key") != config_key:
            continue
        rule = rule_from_fields(entity_id, fields)
        if rule is not None:
            rules.append(rule)
    return rules


__all__ = [
    "CONFIG_RULE_ENTITIES_SQL",
    "CONFIG_RULE_ENTITY_TYPE",
    "load_stored_rules",
    "rule_from_fields",
]
