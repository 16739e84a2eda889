# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Unit tests for configuration preview and stored rule loading."""

from __future__ import annotations

import json
from typing import Any

import pytest
from pydantic import ValidationError

from hera_infra.models import ModelConfigPreviewRequest
from hera_infra.query import DYNAMIC_DATA_SQL
from hera_infra.rules import (
    load_stored_rules,
    preview_rules,
    rule_from_fields,
    run_config_preview,
)
from hera_infra.rules.config_rule_store import CONFIG_RULE_ENTITIES_SQL
from hera_infra.runtime import TrustedOrgId
from tests.helpers import TEST_ORG_ID, FakeDatabase

RESTAURANT = {"operator": "equals", "field": "industry", "value": "restaurant"}

PREVIEW_PARAMS: dict[str, Any] = {
    "config_key": "pos.tips.enabled",
    "test_rules": [
        {"rule_type": "default", "priority": 0, "config_value": False},
        {"priority": 100, "conditions": RESTAURANT, "config_value": True},
    ],
    "test_cases": [
        {"name": "restaurant", "context": {"industry": "restaurant"}, "expected": True},
        {"context": {"industry": "salon"}, "expected": True},
        {"name": "no expectation", "context": {}},
    ],
}


def _dynamic(entity_id: str, key: str, value_type: str, column: str, value: object) -> dict[str, Any]:
    return {"entity_id": entity_id, "key": key, "value_type": value_type, column: value}


def stored_rule_rows(entity_id: str, config_key: str, value: object, priority: float = 0) -> list[dict[str, Any]]:
    return [
        _dynamic(entity_id, "config_key", "text", "value_text", config_key),
        _dynamic(entity_id, "rule_type", "text", "value_text", "default"),
        _dynamic(entity_id, "priority", "number", "value_number", priority),
        _dynamic(entity_id, "config_value", "json", "value_json", json.dumps(value)),
    ]


def stored_rules_db(dynamic_rows: list[dict[str, Any]], entity_ids: list[str]) -> FakeDatabase:
    def responder(sql: str, params: list[object]) -> list[dict[str, Any]]:
        if sql == CONFIG_RULE_ENTITIES_SQL:
            return [{"id": eid} for eid in entity_ids]
        if sql == DYNAMIC_DATA_SQL:
            return dynamic_rows
        return []

    return FakeDatabase(responder)


class TestPreviewRules:
    @pytest.mark.unit
    def test_results_and_summary_without_comparison(self) -> None:
        response = preview_rules(ModelConfigPreviewRequest.model_validate(PREVIEW_PARAMS))

        results = response["results"]
        assert response["config_key"] == "pos.tips.enabled"
        assert [r["name"] for r in results] == ["restaurant", "case_2", "no expectation"]
        assert [r["resolved_value"] for r in results] == [True, False, False]
        assert [r["passed"] for r in results] == [True, False, None]
        assert all(r["impact"] == "none" for r in results)
        assert response["summary"] == {
            "total": 3,
            "passed": 1,
            "failed": 1,
            "changed": 0,
            "impact": {"high": 0, "medium": 0, "low": 0, "none": 3},
        }

    @pytest.mark.unit
    def test_explicit_none_expectation_is_checked(self) -> None:
        request = ModelConfigPreviewRequest.model_validate(
            {
                "config_key": "k",
                "test_rules": [],
                "test_cases": [{"context": {}, "expected": None}],
            }
        )

        assert preview_rules(request)["results"][0]["passed"] is True

    @pytest.mark.unit
    def test_missing_config_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelConfigPreviewRequest.model_validate({"test_rules": []})


class TestRunConfigPreview:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_database_access_without_compare(self, org_id: TrustedOrgId) -> None:
        response = await run_config_preview(None, org_id, PREVIEW_PARAMS)

        assert response["summary"]["total"] == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_compare_requires_database(self, org_id: TrustedOrgId) -> None:
        with pytest.raises(ValueError, match="compare_current"):
            await run_config_preview(None, org_id, {**PREVIEW_PARAMS, "compare_current": True})

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_compare_current_diffs_against_stored_rules(
        self, org_id: TrustedOrgId
    ) -> None:
        db = stored_rules_db(stored_rule_rows("r1", "pos.tips.enabled", False), ["r1"])

        response = await run_config_preview(
            db, org_id, {**PREVIEW_PARAMS, "compare_current": True}
        )

        first, second, _ = response["results"]
        assert first["current_value"] is False
        assert first["changed_from_current"] is True
        assert first["impact"] == "high"
        assert second["changed_from_current"] is False
        assert response["summary"]["changed"] == 1
        assert db.opened == db.released == 1
        assert all(s.params[0] == TEST_ORG_ID for s in db.statements)


class TestStoredRules:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_load_filters_by_config_key(self) -> None:
        rows = [
            *stored_rule_rows("r1", "pos.tips.enabled", True, priority=10),
            *stored_rule_rows("r2", "menu.layout", "grid"),
        ]
        db = stored_rules_db(rows, ["r1", "r2"])

        async with db.session() as session:
            rules = await load_stored_rules(session, TEST_ORG_ID, "pos.tips.enabled")

        assert len(rules) == 1
        assert rules[0].config_value is True
        assert rules[0].priority == 10
        assert db.statements[1].params == [TEST_ORG_ID, ["r1", "r2"]]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_rule_entities_skips_dynamic_query(
        self, fake_db: FakeDatabase
    ) -> None:
        async with fake_db.session() as session:
            rules = await load_stored_rules(session, TEST_ORG_ID, "anything")

        assert rules == []
        assert len(fake_db.statements) == 1

    @pytest.mark.unit
    def test_rule_from_fields_decodes_condition_text(self) -> None:
        rule = rule_from_fields(
            "r1",
            {
                "config_key": "k",
                "rule_type": "override",
                "priority": 5,
                "conditions": json.dumps(RESTAURANT),
                "config_value": "x",
            },
        )

        assert rule is not None
        assert rule.conditions == RESTAURANT

    @pytest.mark.unit
    def test_rule_from_fields_skips_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        assert rule_from_fields("r9", {"config_key": "k", "rule_type": "weekly"}) is None
        assert "Skipping malformed stored configuration rule" in caplog.text
