# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Filter operators accepted by the safe query compiler."""

from enum import Enum


class EnumFilterOperator(str, Enum):
    """Filter operator keys of a select request's filter-value object.

    Attributes:
        EQ: ``column = $n``
        IN: ``column = ANY($n)``; value must be an array
        LIKE: ``column LIKE $n``
        GTE: ``column >= $n``
        LTE: ``column <= $n``
        BETWEEN: ``column BETWEEN $n AND $n+1``; value must be a 2-element pair
        IS_NULL: ``column IS NULL`` when truthy, ``IS NOT NULL`` otherwise
    """

    EQ = "eq"
    IN = "in"
    LIKE = "like"
    GTE = "gte"
    LTE = "lte"
    BETWEEN = "between"
    IS_NULL = "is_null"


__all__ = ["EnumFilterOperator"]
