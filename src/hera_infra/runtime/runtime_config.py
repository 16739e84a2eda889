# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Runtime configuration for the HERA tool process."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hera_infra.enums import EnumInfraTransportType
from hera_infra.errors import ModelInfraErrorContext, ProtocolConfigurationError

DEFAULT_STATEMENT_TIMEOUT_MS: int = 3000
DEFAULT_POOL_SIZE: int = 5


class ModelToolRuntimeConfig(BaseModel):
    """Process-level configuration consumed by the tool runtime.

    Attributes:
        database_url: PostgreSQL connection string (secret, never logged).
        statement_timeout_ms: Per-statement timeout applied to every session.
        pool_size: Maximum asyncpg pool size.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    database_url: str = Field(min_length=1, repr=False)
    statement_timeout_ms: int = Field(default=DEFAULT_STATEMENT_TIMEOUT_MS, ge=1)
    pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1, le=100)

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None
    ) -> ModelToolRuntimeConfig:
        """Create configuration from environment variables.

        Reads ``DATABASE_URL`` (required), ``HERA_STATEMENT_TIMEOUT_MS`` and
        ``HERA_DB_POOL_SIZE``.

        Raises:
            ProtocolConfigurationError: If DATABASE_URL is missing or a value
                is invalid. Raised at startup, before any tool runs.
        """
        env = os.environ if environ is None else environ
        ctx = ModelInfraErrorContext.with_correlation(
            transport_type=EnumInfraTransportType.RUNTIME,
            operation="load_config",
        )
        database_url = env.get("DATABASE_URL", "")
        if not database_url:
            raise ProtocolConfigurationError(
                "DATABASE_URL must be configured before starting the tool runtime",
                context=ctx,
            )
        try:
            return cls(
                database_url=database_url,
                statement_timeout_ms=int(
                    env.get("HERA_STATEMENT_TIMEOUT_MS", str(DEFAULT_STATEMENT_TIMEOUT_MS))
                ),
                pool_size=int(env.get("HERA_DB_POOL_SIZE", str(DEFAULT_POOL_SIZE))),
            )
        except (ValueError, ValidationError) as e:
            raise ProtocolConfigurationError(
                f"Invalid tool runtime configuration: {type(e).__name__}",
                context=ctx,
            ) from e

    def as_handler_config(self) -> dict[str, object]:
        """Return the dict accepted by ``DbHandler.initialize``."""
        return {
            "dsn": self.database_url,
            "statement_timeout_ms": self.statement_timeout_ms,
            "pool_size": self.pool_size,
        }


__all__ = [
    "DEFAULT_POOL_SIZE",
    "DEFAULT_STATEMENT_TIMEOUT_MS",
    "ModelToolRuntimeConfig",
]
