# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Operators of the configuration condition DSL."""

from enum import Enum


class EnumConditionOperator(str, Enum):
    """Condition node operators.

    ``AND`` and ``OR`` are composite nodes carrying a ``conditions`` array;
    every other operator is a leaf comparing ``context[field]`` with ``value``.
    """

    EQUALS = "equals"
    AND = "and"
    OR = "or"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


__all__ = ["EnumConditionOperator"]
