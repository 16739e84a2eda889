# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Guardrail rule severity levels."""

from enum import Enum


class EnumSecurityLevel(str, Enum):
    """Severity of a guardrail rule, ordered LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Return the numeric ordering of this level."""
        return _RANKS[self]


_RANKS: dict[EnumSecurityLevel, int] = {
    EnumSecurityLevel.LOW: 1,
    EnumSecurityLevel.MEDIUM: 2,
    EnumSecurityLevel.HIGH: 3,
    EnumSecurityLevel.CRITICAL: 4,
}


__all__ = ["EnumSecurityLevel"]
