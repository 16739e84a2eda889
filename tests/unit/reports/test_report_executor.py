# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Unit tests for the report catalog and executor.

Tests cover:
    - Per-call SQL safety gate
    - Positional parameter binding by declared name
    - JSON and CSV output shapes
    - Display label attachment
"""

from __future__ import annotations

import pytest

from hera_infra.errors import ReportNotFoundError, ReportUnsafeSqlError
from hera_infra.query import DISPLAY_LABELS_SQL
from hera_infra.reports import (
    REPORT_CATALOG,
    bind_report_params,
    get_report,
    is_report_template_safe,
    is_safe_select,
    list_reports,
    rows_to_csv,
    run_report,
)
from hera_infra.runtime import TrustedOrgId
from tests.helpers import TEST_ORG_ID, FakeDatabase

TOP_ITEMS = "HERA.REPORT.SALES.TOP_ITEMS.v1"


class TestCatalog:
    @pytest.mark.unit
    def test_every_template_passes_the_gate(self) -> None:
        for definition in REPORT_CATALOG.values():
            assert is_report_template_safe(definition.sql_template), definition.report_code

    @pytest.mark.unit
    def test_list_reports_describes_params(self) -> None:
        listed = {r["report_code"]: r for r in list_reports()}

        assert listed[TOP_ITEMS]["params"] == ["from", "to", "limit"]
        assert listed["HERA.REPORT.FINANCE.AR_AGING.v1"]["params"] == ["as_of"]

    @pytest.mark.unit
    def test_get_report_rejects_non_strings(self) -> None:
        assert get_report(None) is None
        assert get_report(["HERA.REPORT.SALES.DAILY.v1"]) is None


class TestSafetyGate:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "sql",
        [
            "DELETE FROM core_entities WHERE organization_id = $1",
            "select 1 where organization_id = $1; drop table core_entities",
            "SELECT * FROM t WHERE organization_id = $1 FOR UPDATE",
            "with x as (select 1) select * from x where organization_id = $1",
        ],
    )
    def test_unsafe_templates(self, sql: str) -> None:
        assert is_report_template_safe(sql) is False

    @pytest.mark.unit
    def test_keywords_inside_identifiers_are_allowed(self) -> None:
        sql = "  SELECT updated_at, created_by FROM t WHERE organization_id = $1"

        assert is_safe_select(sql)
        assert is_report_template_safe(sql)

    @pytest.mark.unit
    def test_missing_org_predicate_is_unsafe(self) -> None:
        assert is_safe_select("select * from core_entities")
        assert not is_report_template_safe("select * from core_entities")

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.usefixtures("restore_report_catalog")
    async def test_mutated_template_fails_on_next_call(
        self, org_id: TrustedOrgId, fake_db: FakeDatabase
    ) -> None:
        await run_report(fake_db, org_id, TOP_ITEMS, {"from": "2024-01-01"})
        original = REPORT_CATALOG[TOP_ITEMS]
        REPORT_CATALOG[TOP_ITEMS] = original.model_copy(
            update={"sql_template": original.sql_template + "; DROP TABLE core_entities"}
        )

        with pytest.raises(ReportUnsafeSqlError) as exc_info:
            await run_report(fake_db, org_id, TOP_ITEMS, {"from": "2024-01-01"})

        assert str(exc_info.value) == "REPORT_UNSAFE_SQL"
        assert len(fake_db.statements) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_report(self, org_id: TrustedOrgId, fake_db: FakeDatabase) -> None:
        with pytest.raises(ReportNotFoundError) as exc_info:
            await run_report(fake_db, org_id, "HERA.REPORT.NOPE.v1")

        assert str(exc_info.value) == "REPORT_NOT_FOUND"
        assert fake_db.opened == 0


class TestParameterBinding:
    @pytest.mark.unit
    def test_top_items_binding_order(self, org_id: TrustedOrgId) -> None:
        definition = REPORT_CATALOG[TOP_ITEMS]

        bound = bind_report_params(
            definition, org_id, {"limit": 10, "to": "2024-01-31", "from": "2024-01-01"}
        )

        assert bound == [TEST_ORG_ID, "2024-01-01", "2024-01-31", 10]

    @pytest.mark.unit
    def test_missing_params_bind_null_and_extras_ignored(
        self, org_id: TrustedOrgId
    ) -> None:
        definition = REPORT_CATALOG[TOP_ITEMS]

        bound = bind_report_params(
            definition, org_id, {"from": "2024-01-01", "organization_id": "evil"}
        )

        assert bound == [TEST_ORG_ID, "2024-01-01", None, None]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_executed_params_and_explain(
        self, org_id: TrustedOrgId, fake_db: FakeDatabase
    ) -> None:
        result = await run_report(
            fake_db,
            org_id,
            TOP_ITEMS,
            {"from": "2024-01-01", "to": "2024-01-31", "limit": 10},
        )

        statement = fake_db.statements[0]
        assert statement.sql == REPORT_CATALOG[TOP_ITEMS].sql_template
        assert statement.params == [TEST_ORG_ID, "2024-01-01", "2024-01-31", 10]
        assert result["explain"] == {"sql": statement.sql, "params": statement.params}


class TestOutputFormats:
    ROWS = [
        {"item_id": "i1", "item_name": "Shampoo", "revenue": 120.5},
        {"item_id": "i2", "item_name": 'Cut, "deluxe"', "revenue": None},
    ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_json_format(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase(lambda sql, params: self.ROWS)

        result = await run_report(db, org_id, TOP_ITEMS, {})

        assert result["format"] == "json"
        assert result["data"] == self.ROWS
        assert result["meta"] == {"rows": 2}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_csv_format(self, org_id: TrustedOrgId) -> None:
        db = FakeDatabase(lambda sql, params: self.ROWS)

        result = await run_report(db, org_id, TOP_ITEMS, {}, fmt="CSV")

        assert result["format"] == "csv"
        assert result["data"].split("\n") == [
            "item_id,item_name,revenue",
            '"i1","Shampoo",120.5',
            '"i2","Cut, \\"deluxe\\"",""',
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_csv_of_empty_result_uses_statement_fields(
        self, org_id: TrustedOrgId
    ) -> None:
        db = FakeDatabase(empty_fields=["item_id", "revenue"])

        result = await run_report(db, org_id, TOP_ITEMS, {}, fmt="csv")

        assert result["data"] == "item_id,revenue"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_format_falls_back_to_json(
        self, org_id: TrustedOrgId, fake_db: FakeDatabase
    ) -> None:
        result = await run_report(fake_db, org_id, TOP_ITEMS, {}, fmt="xlsx")

        assert result["format"] == "json"

    @pytest.mark.unit
    def test_rows_to_csv_missing_cell_is_empty_string(self) -> None:
        assert rows_to_csv(["a", "b"], [{"a": 1}]) == 'a,b\n1,""'


class TestDisplayLabels:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_labels_attached_on_same_session(self, org_id: TrustedOrgId) -> None:
        def responder(sql: str, params: list[object]) -> list[dict[str, object]]:
            if sql == DISPLAY_LABELS_SQL:
                return [
                    {"entity_type_code": "service", "locale": "default", "singular": "Service", "plural": "Services"}
                ]
            return []

        db = FakeDatabase(responder)

        result = await run_report(db, org_id, TOP_ITEMS, {}, display_labels=True)

        assert result["meta"]["display_labels"] == {
            "service": {"default": {"singular": "Service", "plural": "Services"}}
        }
        assert db.opened == db.released == 1
        assert [s.params[0] for s in db.statements] == [TEST_ORG_ID, TEST_ORG_ID]
