# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Unit tests for priority rule resolution and impact classification."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hera_infra.enums import EnumImpactLevel
from hera_infra.models import ModelConfigRule
from hera_infra.rules import classify_impact, order_rules, resolve_rules

RESTAURANT = {"operator": "equals", "field": "industry", "value": "restaurant"}

DEFAULT_AND_RESTAURANT = [
    {"config_key": "menu.layout", "rule_type": "default", "priority": 0, "config_value": "D"},
    {
        "config_key": "menu.layout",
        "rule_type": "conditional",
        "priority": 100,
        "conditions": RESTAURANT,
        "config_value": "R",
    },
]


class TestResolveRules:
    @pytest.mark.unit
    def test_higher_priority_match_wins(self) -> None:
        assert resolve_rules(DEFAULT_AND_RESTAURANT, {"industry": "restaurant"}) == "R"

    @pytest.mark.unit
    def test_falls_back_to_default(self) -> None:
        assert resolve_rules(DEFAULT_AND_RESTAURANT, {"industry": "healthcare"}) == "D"

    @pytest.mark.unit
    def test_no_match_and_no_default_is_none(self) -> None:
        rules = [DEFAULT_AND_RESTAURANT[1]]

        assert resolve_rules(rules, {"industry": "healthcare"}) is None
        assert resolve_rules([], {"industry": "restaurant"}) is None

    @pytest.mark.unit
    def test_conditional_default_still_falls_back(self) -> None:
        rules = [
            {
                "rule_type": "default",
                "priority": 0,
                "conditions": {"operator": "equals", "field": "never", "value": 1},
                "config_value": "fallback",
            }
        ]

        assert resolve_rules(rules, {}) == "fallback"

    @pytest.mark.unit
    def test_equal_priorities_keep_input_order(self) -> None:
        rules = [
            {"priority": 10, "config_value": "first"},
            {"priority": 10, "config_value": "second"},
        ]

        assert resolve_rules(rules, {}) == "first"

    @pytest.mark.unit
    def test_config_key_filter(self) -> None:
        rules = [
            {"config_key": "a", "priority": 5, "config_value": 1},
            {"config_key": "b", "priority": 1, "config_value": 2},
        ]

        assert resolve_rules(rules, {}, config_key="b") == 2

    @pytest.mark.unit
    def test_malformed_condition_never_matches(self) -> None:
        rules = [
            {"priority": 50, "conditions": {"operator": "bogus"}, "config_value": "x"},
            {"rule_type": "default", "config_value": "y"},
        ]

        assert resolve_rules(rules, {}) == "y"

    @pytest.mark.unit
    def test_invalid_rule_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            resolve_rules([{"rule_type": "sometimes"}], {})

    @pytest.mark.unit
    def test_order_rules_descending(self) -> None:
        rules = [
            ModelConfigRule(priority=1, config_value="low"),
            ModelConfigRule(priority=99, config_value="high"),
            ModelConfigRule(priority=50, config_value="mid"),
        ]

        assert [r.config_value for r in order_rules(rules)] == ["high", "mid", "low"]


class TestClassifyImpact:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("current", "proposed", "expected"),
        [
            (True, False, EnumImpactLevel.HIGH),
            (True, True, EnumImpactLevel.NONE),
            (100, 150, EnumImpactLevel.HIGH),
            (100, 40, EnumImpactLevel.HIGH),
            (100, 110, EnumImpactLevel.MEDIUM),
            (100, 105, EnumImpactLevel.LOW),
            (0, 1, EnumImpactLevel.HIGH),
            (5, 5.0, EnumImpactLevel.NONE),
            ("grid", "list", EnumImpactLevel.MEDIUM),
            ({"a": 1}, {"a": 1}, EnumImpactLevel.NONE),
            (None, "R", EnumImpactLevel.MEDIUM),
            (None, None, EnumImpactLevel.NONE),
            (1, True, EnumImpactLevel.MEDIUM),
        ],
    )
    def test_classification(
        self, current: object, proposed: object, expected: EnumImpactLevel
    ) -> None:
        assert classify_impact(current, proposed) is expected
