# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Impact classification of a configuration change in the preview flow."""

from enum import Enum


class EnumImpactLevel(str, Enum):
    """How strongly a candidate rule set changes a resolved value."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


__all__ = ["EnumImpactLevel"]
