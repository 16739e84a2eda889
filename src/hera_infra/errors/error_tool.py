# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Caller-visible tool errors.

A ToolError's string form is exactly its code, which is what the dispatcher
places in the ``error`` field of the failure envelope. Additional detail
(table name, report code, dropped columns) travels in the structured context
and in logs, never in the code itself.

Error Hierarchy:
    RuntimeHostError
    └── ToolError
        ├── OrgContextMissingError   (operator must fix configuration)
        ├── TableNotAllowedError     (caller-correctable)
        ├── NoValidColumnsError      (caller-correctable)
        ├── ReportNotFoundError      (caller-correctable)
        └── ReportUnsafeSqlError     (catalog integrity failure)
"""

from __future__ import annotations

from hera_infra.enums import EnumInfraErrorCode, EnumToolErrorCode
from hera_infra.errors.infra_errors import RuntimeHostError
from hera_infra.errors.model_infra_error_context import ModelInfraErrorContext


class ToolError(RuntimeHostError):
    """Base class for errors reported to tool callers by code."""

    code: EnumToolErrorCode = EnumToolErrorCode.UNKNOWN_TOOL
    infra_error_code: EnumInfraErrorCode = EnumInfraErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=self.code.value,
            error_code=self.infra_error_code,
            context=context,
            **extra_context,
        )


class OrgContextMissingError(ToolError):
    """No organization id could be resolved from trusted configuration."""

    code = EnumToolErrorCode.ORG_CONTEXT_MISSING
    infra_error_code = EnumInfraErrorCode.INVALID_CONFIGURATION


class TableNotAllowedError(ToolError):
    """Requested table is not registered in the whitelist."""

    code = EnumToolErrorCode.TABLE_NOT_ALLOWED
    infra_error_code = EnumInfraErrorCode.PERMISSION_DENIED


class NoValidColumnsError(ToolError):
    """Every requested column was outside the table's whitelist."""

    code = EnumToolErrorCode.NO_VALID_COLUMNS


class ReportNotFoundError(ToolError):
    """Unknown report code."""

    code = EnumToolErrorCode.REPORT_NOT_FOUND
    infra_error_code = EnumInfraErrorCode.RESOURCE_NOT_FOUND


class ReportUnsafeSqlError(ToolError):
    """A catalog template failed the read-only safety gate."""

    code = EnumToolErrorCode.REPORT_UNSAFE_SQL
    infra_error_code = EnumInfraErrorCode.OPERATION_FAILED


__all__ = [
    "ToolError",
    "OrgContextMissingError",
    "TableNotAllowedError",
    "NoValidColumnsError",
    "ReportNotFoundError",
    "ReportUnsafeSqlError",
]
