# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Table/filter whitelist registry.

This registry is the single authorization boundary between caller-supplied
strings and SQL identifiers. Nothing is introspected from the database:
adding a table, column or filter key requires an edit here.

No table exposes ``organization_id`` as a filter key. Organization scope is
always injected by the compiler as ``$1``.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from hera_infra.enums import EnumFilterOperator
from hera_infra.models import ModelFilterRule, ModelTableWhitelist

_EQ = EnumFilterOperator.EQ
_IN = EnumFilterOperator.IN
_LIKE = EnumFilterOperator.LIKE
_GTE = EnumFilterOperator.GTE
_LTE = EnumFilterOperator.LTE
_BETWEEN = EnumFilterOperator.BETWEEN
_IS_NULL = EnumFilterOperator.IS_NULL

_ID_OPS = frozenset({_EQ, _IN})
_CODE_OPS = frozenset({_EQ, _IN, _LIKE})
_RANGE_OPS = frozenset({_EQ, _GTE, _LTE, _BETWEEN})


def _rule(column: str, ops: Iterable[EnumFilterOperator]) -> ModelFilterRule:
    return ModelFilterRule(target_column=column, allowed_ops=frozenset(ops))


_TIMESTAMPS = ("created_at", "updated_at", "created_by", "updated_by", "version")

CORE_ENTITIES = ModelTableWhitelist(
    table_name="core_entities",
    allowed_columns=frozenset(
        {
            "id",
            "organization_id",
            "entity_type",
            "entity_name",
            "entity_code",
            "entity_description",
            "smart_code",
            "smart_code_status",
            "status",
            "parent_entity_id",
            "tags",
            "business_rules",
            "metadata",
            "ai_confidence",
            "ai_classification",
            "ai_insights",
            *_TIMESTAMPS,
        }
    ),
    filter_rules={
        "id": _rule("id", _ID_OPS),
        "entity_type": _rule("entity_type", _ID_OPS),
        "entity_code": _rule("entity_code", _CODE_OPS),
        "entity_name": _rule("entity_name", {_EQ, _LIKE}),
        "smart_code": _rule("smart_code", _CODE_OPS),
        "status": _rule("status", _ID_OPS),
        "parent_entity_id": _rule("parent_entity_id", {_EQ, _IN, _IS_NULL}),
        "created_at": _rule("created_at", {_GTE, _LTE, _BETWEEN}),
        "updated_at": _rule("updated_at", {_GTE, _LTE, _BETWEEN}),
    },
)

CORE_RELATIONSHIPS = ModelTableWhitelist(
    table_name="core_relationships",
    allowed_columns=frozenset(
        {
            "id",
            "organization_id",
            "from_entity_id",
            "to_entity_id",
            "relationship_type",
            "relationship_direction",
            "relationship_strength",
            "relationship_data",
            "smart_code",
            "is_active",
            "effective_date",
            "expiration_date",
            *_TIMESTAMPS,
        }
    ),
    filter_rules={
        "id": _rule("id", _ID_OPS),
        "from_entity_id": _rule("from_entity_id", _ID_OPS),
        "to_entity_id": _rule("to_entity_id", _ID_OPS),
        "relationship_type": _rule("relationship_type", _ID_OPS),
        "smart_code": _rule("smart_code", _CODE_OPS),
        "is_active": _rule("is_active", {_EQ}),
        "effective_date": _rule("effective_date", {_GTE, _LTE, _BETWEEN, _IS_NULL}),
        "expiration_date": _rule("expiration_date", {_GTE, _LTE, _BETWEEN, _IS_NULL}),
    },
)

CORE_DYNAMIC_DATA = ModelTableWhitelist(
    table_name="core_dynamic_data",
    allowed_columns=frozenset(
        {
            "id",
            "organization_id",
            "entity_id",
            "key",
            "value_type",
            "value_text",
            "value_number",
            "value_boolean",
            "value_date",
            "value_json",
            "smart_code",
            *_TIMESTAMPS,
        }
    ),
    filter_rules={
        "id": _rule("id", _ID_OPS),
        "entity_id": _rule("entity_id", _ID_OPS),
        "key": _rule("key", _CODE_OPS),
        "value_type": _rule("value_type", _ID_OPS),
        "value_text": _rule("value_text", {_EQ, _LIKE, _IS_NULL}),
        "value_number": _rule("value_number", {*_RANGE_OPS, _IS_NULL}),
        "smart_code": _rule("smart_code", _CODE_OPS),
    },
)

UNIVERSAL_TRANSACTIONS = ModelTableWhitelist(
    table_name="universal_transactions",
    allowed_columns=frozenset(
        {
            "id",
            "organization_id",
            "transaction_type",
            "transaction_code",
            "transaction_date",
            "source_entity_id",
            "target_entity_id",
            "total_amount",
            "transaction_currency_code",
            "base_currency_code",
            "exchange_rate",
            "transaction_status",
            "reference_number",
            "external_reference",
            "due_date",
            "smart_code",
            "business_context",
            "metadata",
            *_TIMESTAMPS,
        }
    ),
    filter_rules={
        "id": _rule("id", _ID_OPS),
        "transaction_type": _rule("transaction_type", _ID_OPS),
        "transaction_code": _rule("transaction_code", _CODE_OPS),
        "status": _rule("transaction_status", _ID_OPS),
        "transaction_date": _rule("transaction_date", _RANGE_OPS),
        "due_date": _rule("due_date", {*_RANGE_OPS, _IS_NULL}),
        "source_entity_id": _rule("source_entity_id", {_EQ, _IN, _IS_NULL}),
        "target_entity_id": _rule("target_entity_id", {_EQ, _IN, _IS_NULL}),
        "total_amount": _rule("total_amount", {_GTE, _LTE, _BETWEEN}),
        "currency": _rule("transaction_currency_code", _ID_OPS),
        "smart_code": _rule("smart_code", _CODE_OPS),
        "reference_number": _rule("reference_number", _CODE_OPS),
    },
)

UNIVERSAL_TRANSACTION_LINES = ModelTableWhitelist(
    table_name="universal_transaction_lines",
    allowed_columns=frozenset(
        {
            "id",
            "organization_id",
            "transaction_id",
            "line_number",
            "entity_id",
            "line_type",
            "description",
            "quantity",
            "unit_amount",
            "line_amount",
            "discount_amount",
            "tax_amount",
            "smart_code",
            "line_data",
            *_TIMESTAMPS,
        }
    ),
    filter_rules={
        "id": _rule("id", _ID_OPS),
        "transaction_id": _rule("transaction_id", _ID_OPS),
        "entity_id": _rule("entity_id", {_EQ, _IN, _IS_NULL}),
        "line_type": _rule("line_type", _ID_OPS),
        "smart_code": _rule("smart_code", _CODE_OPS),
        "line_amount": _rule("line_amount", {_GTE, _LTE, _BETWEEN}),
    },
)

TABLE_WHITELISTS: MappingProxyType[str, ModelTableWhitelist] = MappingProxyType(
    {
        wl.table_name: wl
        for wl in (
            CORE_ENTITIES,
            CORE_RELATIONSHIPS,
            CORE_DYNAMIC_DATA,
            UNIVERSAL_TRANSACTIONS,
            UNIVERSAL_TRANSACTION_LINES,
        )
    }
)


def lookup_whitelist(table: object) -> ModelTableWhitelist | None:
    """Return the whitelist for ``table``, or None when it is not allowed."""
    if not isinstance(table, str):
        return None
    return TABLE_WHITELISTS.get(table)


def registered_tables() -> list[str]:
    """Return the sorted names of every whitelisted table."""
    return sorted(TABLE_WHITELISTS)


__all__ = [
    "CORE_DYNAMIC_DATA",
    "CORE_ENTITIES",
    "CORE_RELATIONSHIPS",
    "TABLE_WHITELISTS",
    "UNIVERSAL_TRANSACTIONS",
    "UNIVERSAL_TRANSACTION_LINES",
    "lookup_whitelist",
    "registered_tables",
]
