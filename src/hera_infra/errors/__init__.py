# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""HERA Infrastructure Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    RuntimeHostError: Base infrastructure error class
    ProtocolConfigurationError: Configuration validation errors
    InfraConnectionError: Database connection errors
    InfraTimeoutError: Statement timeout errors
    InfraAuthenticationError: Database authentication errors
    ToolError and subclasses: caller-visible tool error codes
    GuardrailViolationError: Write request blocked by guardrails

Correlation ID Assignment:
    - Propagate correlation_id from the incoming call into error context
    - If no correlation_id exists, generate one with uuid4()
    - Keep correlation IDs as UUID objects; stringify only for logging

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Passwords or full connection strings (DATABASE_URL)
        - Bound parameter values of caller queries
        - Row data

    SAFE to include:
        - Table names, report codes, tool names
        - Error codes and operation names
        - Timeout values and correlation IDs
"""

from hera_infra.errors.error_guardrail import GuardrailViolationError
from hera_infra.errors.error_tool import (
    NoValidColumnsError,
    OrgContextMissingError,
    ReportNotFoundError,
    ReportUnsafeSqlError,
    TableNotAllowedError,
    ToolError,
)
from hera_infra.errors.infra_errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraTimeoutError,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from hera_infra.errors.model_infra_error_context import ModelInfraErrorContext

__all__: list[str] = [
    # Configuration model
    "ModelInfraErrorContext",
    # Infrastructure errors
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
    # Tool errors
    "ToolError",
    "OrgContextMissingError",
    "TableNotAllowedError",
    "NoValidColumnsError",
    "ReportNotFoundError",
    "ReportUnsafeSqlError",
    # Guardrails
    "GuardrailViolationError",
]
