# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Report catalog entry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelReportDefinition(BaseModel):
    """A named, parameterized, read-only report.

    Attributes:
        report_code: Versioned smart code identifying the report.
        description: Short human-readable summary for tool listings.
        sql_template: Single SELECT statement scoped by ``organization_id = $1``.
        params: Caller parameter names bound as ``$2..$n`` in this order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    report_code: str = Field(min_length=1)
    description: str = ""
    sql_template: str = Field(min_length=1)
    params: tuple[str, ...] = ()


__all__ = ["ModelReportDefinition"]
