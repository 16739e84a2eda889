# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Caller-visible tool error codes.

These codes are what an agent sees in the ``error`` field of a failed tool
envelope, so their string values are part of the wire contract.
"""

from enum import Enum


class EnumToolErrorCode(str, Enum):
    """Error codes surfaced by the hera.* tool surface.

    Attributes:
        ORG_CONTEXT_MISSING: No trusted organization scope could be resolved.
        TABLE_NOT_ALLOWED: Requested table is not in the whitelist registry.
        NO_VALID_COLUMNS: None of the requested columns are whitelisted.
        REPORT_NOT_FOUND: Unknown report code.
        REPORT_UNSAFE_SQL: Stored report template failed the safety gate.
        UNKNOWN_TOOL: Tool name is not registered with the dispatcher.
    """

    ORG_CONTEXT_MISSING = "ORG_CONTEXT_MISSING"
    TABLE_NOT_ALLOWED = "TABLE_NOT_ALLOWED"
    NO_VALID_COLUMNS = "NO_VALID_COLUMNS"
    REPORT_NOT_FOUND = "REPORT_NOT_FOUND"
    REPORT_UNSAFE_SQL = "REPORT_UNSAFE_SQL"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"


__all__ = ["EnumToolErrorCode"]
