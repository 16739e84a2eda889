# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Infrastructure Error Context Configuration Model.

This module defines the configuration model for infrastructure error context,
encapsulating common structured fields to reduce __init__ parameter count
while keeping strong typing.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from hera_infra.enums import EnumInfraTransportType


class ModelInfraErrorContext(BaseModel):
    """Configuration model for infrastructure error context.

    Attributes:
        transport_type: Type of infrastructure transport (DATABASE, MCP, ...)
        operation: Operation being performed (hera.select, db.query, ...)
        target_name: Target resource name (table, report code, tool name)
        correlation_id: Request correlation ID for tracing

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.DATABASE,
        ...     operation="db.query",
        ...     target_name="universal_transactions",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise RuntimeHostError("Query failed", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: EnumInfraTransportType | None = Field(
        default=None,
        description="Type of infrastructure transport (DATABASE, MCP, etc.)",
    )
    operation: str | None = Field(
        default=None,
        description="Operation being performed (db.query, hera.select, etc.)",
    )
    target_name: str | None = Field(
        default=None,
        description="Target resource name (table, report code, tool)",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Request correlation ID for tracing",
    )

    @classmethod
    def with_correlation(
        cls,
        correlation_id: UUID | None = None,
        **kwargs: object,
    ) -> ModelInfraErrorContext:
        """Build a context, generating a correlation ID when none is given."""
        return cls(correlation_id=correlation_id or uuid4(), **kwargs)


__all__ = ["ModelInfraErrorContext"]
