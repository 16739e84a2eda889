# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Result of one executed statement."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelQueryResult(BaseModel):
    """Rows and field list of an executed query.

    Attributes:
        rows: Rows as JSON-safe dicts.
        fields: Column names in result order, known even for empty results.
        row_count: Number of rows returned.
        duration_ms: Wall-clock execution time.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rows: list[dict[str, Any]] = Field(default_factory=list)
    fields: list[str] = Field(default_factory=list)
    row_count: int = 0
    duration_ms: float = 0.0


__all__ = ["ModelQueryResult"]
