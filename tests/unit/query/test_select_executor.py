# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Unit tests for hera.select execution and result embeds.

The fake store evaluates the compiled WHERE clause against in-memory rows, so
these tests exercise compiler, executor and embeds together without a
database.
"""

from __future__ import annotations

import re
from typing import Any

import pytest

from hera_infra.errors import InfraTimeoutError
from hera_infra.query import (
    DISPLAY_LABELS_SQL,
    DYNAMIC_DATA_SQL,
    TRANSACTION_LINES_SQL,
    execute_select,
)
from hera_infra.runtime import TrustedOrgId
from tests.helpers import OTHER_ORG_ID, TEST_ORG_ID, FakeDatabase

_PREDICATE = re.compile(r"(\w+) (=|>=|<=) \$(\d+)")

TRANSACTIONS: list[dict[str, Any]] = [
    {"id": "t1", "organization_id": TEST_ORG_ID, "transaction_status": "posted", "transaction_date": "2024-01-05"},
    {"id": "t2", "organization_id": TEST_ORG_ID, "transaction_status": "posted", "transaction_date": "2024-02-10"},
    {"id": "t3", "organization_id": TEST_ORG_ID, "transaction_status": "posted", "transaction_date": "2024-03-15"},
    {"id": "t4", "organization_id": TEST_ORG_ID, "transaction_status": "draft", "transaction_date": "2024-01-20"},
    {"id": "t5", "organization_id": TEST_ORG_ID, "transaction_status": "posted", "transaction_date": "2023-12-31"},
]


def _matches(row: dict[str, Any], sql: str, params: list[object]) -> bool:
    where = sql.split(" WHERE ", 1)[1].split(" LIMIT ", 1)[0].split(" ORDER BY ")[0]
    for column, op, index in _PREDICATE.findall(where):
        value = params[int(index) - 1]
        actual = row.get(column)
        if op == "=" and actual != value:
            return False
        if op == ">=" and not (actual is not None and actual >= value):
            return False
        if op == "<=" and not (actual is not None and actual <= value):
            return False
    return True


def in_memory_store(tables: dict[str, list[dict[str, Any]]]):
    """Build a responder that filters ``tables`` by the compiled predicates."""

    def responder(sql: str, params: list[object]) -> list[dict[str, Any]]:
        table = re.search(r" FROM (\w+)", sql)
        if table is None or table.group(1) not in tables:
            return []
        return [dict(r) for r in tables[table.group(1)] if _matches(r, sql, params)]

    return responder


class TestEndToEndSelect:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_posted_transactions_in_range(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase(in_memory_store({"universal_transactions": TRANSACTIONS}))

        result = await execute_select(
            db,
            {
                "table": "universal_transactions",
                "filters": {
                    "status": "posted",
                    "transaction_date": {"gte": "2024-01-01"},
                },
                "limit": 10,
            },
            org_id,
        )

        assert [row["id"] for row in result["rows"]] == ["t1", "t2", "t3"]
        assert result["meta"]["count"] == 3
        assert result["meta"]["limit"] == 10
        assert result["meta"]["offset"] == 0
        assert "dropped" not in result["meta"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_other_tenant_rows_never_returned(self, org_id: TrustedOrgId) -> None:
        foreign = {**TRANSACTIONS[0], "id": "x1", "organization_id": OTHER_ORG_ID}
        db = FakeDatabase(
            in_memory_store({"universal_transactions": [*TRANSACTIONS, foreign]})
        )

        result = await execute_select(
            db,
            {
                "table": "universal_transactions",
                "filters": {"organization_id": OTHER_ORG_ID},
            },
            org_id,
        )

        assert "x1" not in [row["id"] for row in result["rows"]]
        assert result["meta"]["dropped"]["filters"] == ["organization_id"]
        assert db.statements[0].params[0] == TEST_ORG_ID

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_meta_reports_sql_and_whitelist(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase()

        result = await execute_select(db, {"table": "core_entities"}, org_id)

        meta = result["meta"]
        assert meta["sql"] == db.statements[0].sql
        assert "entity_name" in meta["allowed_columns"]
        assert "entity_type" in meta["allowed_filters"]
        assert meta["count"] == 0
        assert result["rows"] == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_database_error_releases_session(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase(error=InfraTimeoutError("Statement timed out after 3000ms"))

        with pytest.raises(InfraTimeoutError):
            await execute_select(db, {"table": "core_entities"}, org_id)

        assert db.opened == db.released == 1


class TestEmbeds:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_transaction_without_lines_gets_empty_list(
        self, org_id: TrustedOrgId
    ) -> None:
        db = FakeDatabase(
            in_memory_store(
                {
                    "universal_transactions": TRANSACTIONS[:1],
                    "universal_transaction_lines": [],
                }
            )
        )

        result = await execute_select(
            db,
            {"table": "universal_transactions", "embed": {"lines_for_transactions": True}},
            org_id,
        )

        assert result["rows"][0]["lines"] == []
        assert result["meta"]["lines"] == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_lines_nested_by_transaction(self, org_id: TrustedOrgId) -> None:
        lines = [
            {"transaction_id": "t1", "line_number": 1, "line_amount": 10},
            {"transaction_id": "t1", "line_number": 2, "line_amount": 5},
            {"transaction_id": "t2", "line_number": 1, "line_amount": 7},
        ]

        def responder(sql: str, params: list[object]) -> list[dict[str, Any]]:
            if sql == TRANSACTION_LINES_SQL:
                return [line for line in lines if line["transaction_id"] in params[1]]
            return [{"id": "t1"}, {"id": "t2"}, {"id": "t3"}]

        db = FakeDatabase(responder)

        result = await execute_select(
            db,
            {"table": "universal_transactions", "embed": {"lines_for_transactions": True}},
            org_id,
        )

        by_id = {row["id"]: row["lines"] for row in result["rows"]}
        assert len(by_id["t1"]) == 2
        assert len(by_id["t2"]) == 1
        assert by_id["t3"] == []
        line_stmt = db.statements_matching("universal_transaction_lines")[0]
        assert line_stmt.params == [TEST_ORG_ID, ["t1", "t2", "t3"]]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dynamic_data_skipped_outside_core_entities(
        self, org_id: TrustedOrgId
    ) -> None:
        db = FakeDatabase(lambda sql, params: [{"id": "t1"}])

        result = await execute_select(
            db,
            {"table": "universal_transactions", "embed": {"entity_dynamic_data": True}},
            org_id,
        )

        assert "dynamic_data" not in result["rows"][0]
        assert "dynamic_data" not in result["meta"]
        assert db.statements_matching("core_dynamic_data") == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dynamic_data_flattened_for_entities(
        self, org_id: TrustedOrgId
    ) -> None:
        dynamic_rows = [
            {"entity_id": "e1", "key": "price", "value_type": "number", "value_number": "12.5"},
            {"entity_id": "e1", "key": "active", "value_type": "boolean", "value_boolean": True},
            {"entity_id": "e1", "key": "launch", "value_type": "date", "value_date": "2024-05-01"},
            {"entity_id": "e1", "key": "dims", "value_type": "json", "value_json": '{"w": 2}'},
            {"entity_id": "e1", "key": "color", "value_type": "colour", "value_text": "red"},
        ]

        def responder(sql: str, params: list[object]) -> list[dict[str, Any]]:
            if sql == DYNAMIC_DATA_SQL:
                return dynamic_rows
            return [{"id": "e1"}, {"id": "e2"}]

        db = FakeDatabase(responder)

        result = await execute_select(
            db,
            {"table": "core_entities", "embed": {"entity_dynamic_data": True}},
            org_id,
        )

        first, second = result["rows"]
        assert first["dynamic_data"] == {
            "price": 12.5,
            "active": True,
            "launch": "2024-05-01",
            "dims": {"w": 2},
            "color": None,
        }
        assert second["dynamic_data"] == {}
        assert result["meta"]["dynamic_data"] == 5
        assert result["meta"]["dynamic_data_unknown"] == [
            {"entity_id": "e1", "key": "color", "value_type": "colour"}
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_all_queries_share_one_session_and_org(
        self, org_id: TrustedOrgId
    ) -> None:
        db = FakeDatabase(lambda sql, params: [{"id": "e1"}] if "FROM core_entities" in sql else [])

        await execute_select(
            db,
            {
                "table": "core_entities",
                "embed": {"entity_dynamic_data": True, "display_labels": True},
            },
            org_id,
        )

        assert db.opened == db.released == 1
        assert len(db.statements) == 3
        assert {s.session_index for s in db.statements} == {1}
        assert all(s.params[0] == TEST_ORG_ID for s in db.statements)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_display_labels_grouped_by_type_and_locale(
        self, org_id: TrustedOrgId
    ) -> None:
        label_rows = [
            {"entity_type_code": "customer", "locale": "default", "singular": "Client", "plural": "Clients"},
            {"entity_type_code": "customer", "locale": "es", "singular": "Cliente", "plural": "Clientes"},
        ]

        def responder(sql: str, params: list[object]) -> list[dict[str, Any]]:
            return label_rows if sql == DISPLAY_LABELS_SQL else []

        db = FakeDatabase(responder)

        result = await execute_select(
            db, {"table": "core_entities", "embed": {"display_labels": True}}, org_id
        )

        assert result["meta"]["display_labels"] == {
            "customer": {
                "default": {"singular": "Client", "plural": "Clients"},
                "es": {"singular": "Cliente", "plural": "Clientes"},
            }
        }

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_embed_skipped_when_rows_lack_ids(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase(lambda sql, params: [{"transaction_code": "T-1"}])

        result = await execute_select(
            db,
            {
                "table": "universal_transactions",
                "columns": ["transaction_code"],
                "embed": {"lines_for_transactions": True},
            },
            org_id,
        )

        assert "lines" not in result["meta"]
        assert len(db.statements) == 1
