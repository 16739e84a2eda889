# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Condition evaluator for configuration rules.

A condition is a plain mapping::

    {"operator": "and", "conditions": [
        {"operator": "equals", "field": "industry", "value": "restaurant"},
        {"operator": "greater_than", "field": "seats", "value": "40"},
    ]}

Conditions come from stored configuration and AI-generated previews, so the
evaluator is best-effort: a malformed node, an unknown operator or any error
raised while evaluating makes that condition false instead of propagating.

Coercion follows the rule authoring tools: numeric comparisons convert both
sides the way JavaScript's ``Number()`` does (``"10" > "9"`` is numeric) and
string predicates convert the way ``String()`` does.

``in`` with a non-list value is false while ``not_in`` with a non-list value
is true. Stored rules may depend on either reading, so both are kept.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from hera_infra.enums import EnumConditionOperator

logger = logging.getLogger(__name__)


def js_number(value: object) -> float:
    """Coerce like JavaScript ``Number(value)``; unconvertible values give NaN."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if text in ("Infinity", "+Infinity", "-Infinity"):
            return -math.inf if text.startswith("-") else math.inf
        try:
            if text.lower().startswith(("0x", "0o", "0b")):
                return float(int(text, 0))
            if "_" in text or "inf" in text.lower() or "nan" in text.lower():
                return math.nan
            return float(text)
        except ValueError:
            return math.nan
    if isinstance(value, list):
        if not value:
            return 0.0
        if len(value) == 1:
            return js_number(js_string(value[0]))
    return math.nan


def js_string(value: object) -> str:
    """Coerce like JavaScript ``String(value)``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ",".join("" if item is None else js_string(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def _strict_equals(left: object, right: object) -> bool:
    # JavaScript === : no cross-type coercion, booleans are not numbers
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, (list, dict)) or isinstance(right, (list, dict)):
        # Distinct JSON objects are never identical
        return False
    return type(left) is type(right) and left == right


def _member(value: object, items: list[Any]) -> bool:
    return any(_strict_equals(value, item) for item in items)


def _compare(left: object, right: object, operator: EnumConditionOperator) -> bool:
    a = js_number(left)
    b = js_number(right)
    if operator is EnumConditionOperator.GREATER_THAN:
        return a > b
    if operator is EnumConditionOperator.LESS_THAN:
        return a < b
    if operator is EnumConditionOperator.GREATER_THAN_OR_EQUAL:
        return a >= b
    return a <= b


def _evaluate(condition: Mapping[str, Any], context: Mapping[str, Any]) -> bool:
    operator = EnumConditionOperator(condition["operator"])

    if operator is EnumConditionOperator.AND:
        return all(_evaluate_node(c, context) for c in condition["conditions"])
    if operator is EnumConditionOperator.OR:
        return any(_evaluate_node(c, context) for c in condition["conditions"])

    actual = context.get(condition.get("field"))
    expected = condition.get("value")

    if operator is EnumConditionOperator.EQUALS:
        return _strict_equals(actual, expected)
    if operator in (
        EnumConditionOperator.GREATER_THAN,
        EnumConditionOperator.LESS_THAN,
        EnumConditionOperator.GREATER_THAN_OR_EQUAL,
        EnumConditionOperator.LESS_THAN_OR_EQUAL,
    ):
        return _compare(actual, expected, operator)
    if operator is EnumConditionOperator.IN:
        return isinstance(expected, list) and _member(actual, expected)
    if operator is EnumConditionOperator.NOT_IN:
        return not isinstance(expected, list) or not _member(actual, expected)
    if operator is EnumConditionOperator.CONTAINS:
        return js_string(expected) in js_string(actual)
    if operator is EnumConditionOperator.STARTS_WITH:
        return js_string(actual).startswith(js_string(expected))
    return js_string(actual).endswith(js_string(expected))


def _evaluate_node(condition: object, context: Mapping[str, Any]) -> bool:
    if condition is None:
        return True
    if not isinstance(condition, Mapping):
        return False
    return _evaluate(condition, context)


def evaluate_condition(condition: object, context: Mapping[str, Any] | None) -> bool:
    """Evaluate a condition tree against a context record.

    Args:
        condition: Condition mapping, or None for an unconditional match.
        context: Field values referenced by leaf nodes.

    Returns:
        True when the condition holds; False when it does not or cannot be
        evaluated.
    """
    try:
        return _evaluate_node(condition, context or {})
    except Exception:
        logger.debug(
            "Condition evaluation failed, treating as false",
            extra={"condition": repr(condition)[:500]},
            exc_info=True,
        )
        return False


__all__ = ["evaluate_condition", "js_number", "js_string"]
