# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Configuration rule types."""

from enum import Enum


class EnumRuleType(str, Enum):
    """Rule types for configuration rules sharing a config key.

    Attributes:
        DEFAULT: Fallback rule used when no other rule matches.
        CONDITIONAL: Rule gated by its condition tree.
        OVERRIDE: High-priority rule, usually unconditional or narrowly scoped.
    """

    DEFAULT = "default"
    CONDITIONAL = "conditional"
    OVERRIDE = "override"


__all__ = ["EnumRuleType"]
