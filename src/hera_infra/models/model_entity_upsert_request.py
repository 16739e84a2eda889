# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Entity upsert request for hera_entity_upsert_v1."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelEntityUpsertRequest(BaseModel):
    """Arguments of the universal entity upsert, minus org and actor.

    Organization and actor are supplied by the gateway from trusted context,
    so a request body cannot choose its tenant.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    entity_type: str = Field(min_length=1)
    entity_name: str = Field(min_length=1)
    smart_code: str = Field(min_length=1)
    entity_id: str | None = None
    entity_code: str | None = None
    entity_description: str | None = None
    parent_entity_id: str | None = None
    status: str | None = None
    tags: list[str] | None = None
    smart_code_status: str | None = None
    business_rules: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    ai_confidence: float | None = None
    ai_classification: str | None = None
    ai_insights: dict[str, Any] | None = None
    dynamic_fields: list[dict[str, Any]] = Field(default_factory=list)
    relationships: list[dict[str, Any]] = Field(default_factory=list)


__all__ = ["ModelEntityUpsertRequest"]
