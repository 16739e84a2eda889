# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Database handler configuration and describe models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelDbHandlerConfig(BaseModel):
    """Validated ``DbHandler.initialize`` configuration.

    Attributes:
        dsn: PostgreSQL connection string (secret, never logged).
        statement_timeout_ms: Server-side statement timeout for every session.
        pool_size: Maximum pool size.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    dsn: str = Field(min_length=1, repr=False)
    statement_timeout_ms: int = Field(default=3000, ge=1)
    pool_size: int = Field(default=5, ge=1, le=100)


class ModelDbDescribeResponse(BaseModel):
    """Handler metadata returned by ``DbHandler.describe``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    handler_type: str
    pool_size: int
    statement_timeout_ms: int
    initialized: bool
    version: str


__all__ = ["ModelDbDescribeResponse", "ModelDbHandlerConfig"]
