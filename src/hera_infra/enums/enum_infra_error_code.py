# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Infrastructure error code enumeration used by RuntimeHostError."""

from enum import Enum


class EnumInfraErrorCode(str, Enum):
    """Coarse error classification carried by every infrastructure error."""

    OPERATION_FAILED = "OPERATION_FAILED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    DATABASE_CONNECTION_ERROR = "DATABASE_CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


__all__ = ["EnumInfraErrorCode"]
