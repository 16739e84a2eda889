# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Compiled query produced by the safe query compiler."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelDroppedInputs(BaseModel):
    """Caller inputs silently ignored during compilation.

    Exposed in ``meta.dropped`` so callers and tests can detect silent drops.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    columns: list[str] = Field(default_factory=list)
    filters: list[str] = Field(default_factory=list)
    operators: list[str] = Field(default_factory=list)
    order_by: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.columns or self.filters or self.operators or self.order_by)


class ModelCompiledQuery(BaseModel):
    """Parameterized SELECT ready for execution.

    ``params[0]`` is always the trusted organization id. LIMIT and OFFSET are
    clamped integers interpolated into ``sql``, not bound parameters.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table: str
    sql: str
    params: tuple[object, ...]
    limit: int
    offset: int
    allowed_columns: list[str]
    allowed_filters: dict[str, list[str]]
    dropped: ModelDroppedInputs = Field(default_factory=ModelDroppedInputs)

    @property
    def org_param(self) -> object:
        """Return the organization id bound as ``$1``."""
        return self.params[0]


__all__ = ["ModelCompiledQuery", "ModelDroppedInputs"]
