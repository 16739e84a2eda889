# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Value types of core_dynamic_data rows."""

from enum import Enum


class EnumDynamicValueType(str, Enum):
    """Selects which typed ``value_*`` column holds a dynamic field's value."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"


__all__ = ["EnumDynamicValueType"]
