# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Select request model for hera.select.

Fields are deliberately loose: requests are produced by AI agents, and the
compiler drops what it does not recognize instead of rejecting the call.
Unknown top-level keys (including any ``organization_id``) are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ModelEmbedFlags(BaseModel):
    """Optional follow-up queries attached to a select."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    lines_for_transactions: bool = False
    entity_dynamic_data: bool = False
    display_labels: bool = False

    @property
    def any_enabled(self) -> bool:
        return (
            self.lines_for_transactions
            or self.entity_dynamic_data
            or self.display_labels
        )


class ModelSelectRequest(BaseModel):
    """Caller input for a whitelisted SELECT.

    Attributes:
        table: Logical table name; anything not registered in the whitelist,
            including a missing or non-string value, is rejected by the
            compiler with TABLE_NOT_ALLOWED.
        columns: Requested columns; omitted means ``['*']``.
        filters: ``{filter_key: scalar | list | {op: value}}``.
        order_by: ``[{column, direction}]`` or bare column names.
        limit: Clamped to [1, 1000], default 50.
        offset: Clamped to >= 0, default 0.
        embed: Follow-up enrichment flags.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    table: Any = None
    columns: list[Any] | None = None
    filters: dict[str, Any] = Field(default_factory=dict)
    order_by: list[Any] = Field(default_factory=list)
    limit: Any = None
    offset: Any = None
    embed: ModelEmbedFlags = Field(default_factory=ModelEmbedFlags)

    @field_validator("filters", "order_by", "embed", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        if info.field_name == "filters":
            return {}
        if info.field_name == "order_by":
            return []
        return ModelEmbedFlags()


__all__ = ["ModelEmbedFlags", "ModelSelectRequest"]
