# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Configuration rules: condition evaluation, resolution and preview."""

from hera_infra.rules.condition_evaluator import evaluate_condition, js_number, js_string
from hera_infra.rules.config_preview import preview_rules, run_config_preview
from hera_infra.rules.config_rule_store import load_stored_rules, rule_from_fields
from hera_infra.rules.rule_resolver import (
    classify_impact,
    coerce_rules,
    order_rules,
    resolve_rules,
)

__all__: list[str] = [
    "classify_impact",
    "coerce_rules",
    "evaluate_condition",
    "js_number",
    "js_string",
    "load_stored_rules",
    "order_rules",
    "preview_rules",
    "resolve_rules",
    "rule_from_fields",
    "run_config_preview",
]
