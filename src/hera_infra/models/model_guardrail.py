# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Guardrail request context and validation result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hera_infra.enums import EnumSecurityLevel


class ModelGuardrailContext(BaseModel):
    """Everything a guardrail rule may inspect about a write request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    org_id: str
    actor_user_entity_id: str
    operation: str
    endpoint: str
    payload: dict[str, Any] = Field(default_factory=dict)


class ModelGuardrailResult(BaseModel):
    """Aggregate result of running every guardrail rule."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_valid: bool
    violations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    rules_checked: int = 0
    security_level: EnumSecurityLevel = EnumSecurityLevel.LOW
    validation_time_ms: float = 0.0


__all__ = ["ModelGuardrailContext", "ModelGuardrailResult"]
