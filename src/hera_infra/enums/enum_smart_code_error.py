# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code validation error codes, in the order checks are applied."""

from enum import Enum


class EnumSmartCodeError(str, Enum):
    """Reason a smart code failed validation."""

    EMPTY_CODE = "EMPTY_CODE"
    MISSING_HERA_PREFIX = "MISSING_HERA_PREFIX"
    INVALID_VERSION = "INVALID_VERSION"
    INSUFFICIENT_SEGMENTS = "INSUFFICIENT_SEGMENTS"
    INVALID_SEGMENT = "INVALID_SEGMENT"
    PLATFORM_CONFIG_REQUIRED = "PLATFORM_CONFIG_REQUIRED"
    INVALID_FORMAT = "INVALID_FORMAT"


__all__ = ["EnumSmartCodeError"]
