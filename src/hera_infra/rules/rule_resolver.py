# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Priority rule resolver and change-impact classification."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from hera_infra.enums import EnumImpactLevel, EnumRuleType
from hera_infra.models import ModelConfigRule
from hera_infra.rules.condition_evaluator import evaluate_condition

logger = logging.getLogger(__name__)

HIGH_IMPACT_RATIO: float = 0.5
MEDIUM_IMPACT_RATIO: float = 0.1


def coerce_rules(
    rules: Iterable[ModelConfigRule | Mapping[str, Any]],
) -> list[ModelConfigRule]:
    """Validate raw rule mappings into ModelConfigRule, preserving order."""
    return [
        rule if isinstance(rule, ModelConfigRule) else ModelConfigRule.model_validate(rule)
        for rule in rules
    ]


def order_rules(
    rules: Iterable[ModelConfigRule],
    config_key: str | None = None,
) -> list[ModelConfigRule]:
    """Sort by priority, highest first; equal priorities keep input order."""
    selected = [r for r in rules if config_key is None or r.config_key == config_key]
    return sorted(selected, key=lambda r: r.priority, reverse=True)


def resolve_rules(
    rules: Iterable[ModelConfigRule | Mapping[str, Any]],
    context: Mapping[str, Any] | None,
    config_key: str | None = None,
) -> Any:
    """Resolve the configuration value for a context.

    The first rule, by descending priority, whose condition holds wins. When
    none holds, the value of the first ``default`` rule is used; with no
    default rule the result is None.

    Args:
        rules: Candidate rules; mappings are validated into ModelConfigRule.
        context: Field values the conditions are evaluated against.
        config_key: When given, only rules for this key are considered.
    """
    ordered = order_rules(coerce_rules(rules), config_key)
    for rule in ordered:
        if evaluate_condition(rule.conditions, context):
            return rule.config_value
    for rule in ordered:
        if rule.rule_type is EnumRuleType.DEFAULT:
            return rule.config_value
    return None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify_impact(current: Any, proposed: Any) -> EnumImpactLevel:
    """Classify how much ``proposed`` changes ``current``.

    Booleans that flip are high impact. Numbers are graded by relative change:
    at least 50% is high, at least 10% is medium, anything smaller is low; a
    change away from zero is high. Any other difference is medium.
    """
    if isinstance(current, bool) and isinstance(proposed, bool):
        return EnumImpactLevel.HIGH if current is not proposed else EnumImpactLevel.NONE
    if _is_number(current) and _is_number(proposed):
        if current == proposed:
            return EnumImpactLevel.NONE
        if current == 0:
            return EnumImpactLevel.HIGH
        ratio = abs(proposed - current) / abs(current)
        if ratio >= HIGH_IMPACT_RATIO:
            return EnumImpactLevel.HIGH
        if ratio >= MEDIUM_IMPACT_RATIO:
            return EnumImpactLevel.MEDIUM
        return EnumImpactLevel.LOW
    if current == proposed and type(current) is type(proposed):
        return EnumImpactLevel.NONE
    return EnumImpactLevel.MEDIUM


__all__ = [
    "classify_impact",
    "coerce_rules",
    "order_rules",
    "resolve_rules",
]
