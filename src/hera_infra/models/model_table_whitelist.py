# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Whitelist models for the safe query compiler."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hera_infra.enums import EnumFilterOperator

ALL_COLUMNS: str = "*"


class ModelFilterRule(BaseModel):
    """Maps a logical filter key to one column and its permitted operators."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_column: str = Field(min_length=1)
    allowed_ops: frozenset[EnumFilterOperator] = Field(min_length=1)


class ModelTableWhitelist(BaseModel):
    """Static declaration of what a caller may select and filter on a table.

    Attributes:
        table_name: Physical table name, interpolated verbatim into SQL.
        allowed_columns: Selectable/orderable columns. ``'*'`` is always
            accepted by the compiler and means "every whitelisted column".
        filter_rules: Logical filter key -> target column and operator set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table_name: str = Field(min_length=1)
    allowed_columns: frozenset[str] = Field(min_length=1)
    filter_rules: dict[str, ModelFilterRule] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _filters_target_allowed_columns(self) -> ModelTableWhitelist:
        for key, rule in self.filter_rules.items():
            if rule.target_column not in self.allowed_columns:
                raise ValueError(
                    f"Filter '{key}' targets non-whitelisted column "
                    f"'{rule.target_column}' on {self.table_name}"
                )
        return self

    def is_column_allowed(self, column: str) -> bool:
        """Return True for ``'*'`` or any whitelisted column."""
        return column == ALL_COLUMNS or column in self.allowed_columns

    def describe_filters(self) -> dict[str, list[str]]:
        """Return ``{filter_key: sorted operator names}`` for response metadata."""
        return {
            key: sorted(op.value for op in rule.allowed_ops)
            for key, rule in sorted(self.filter_rules.items())
        }


__all__ = ["ALL_COLUMNS", "ModelFilterRule", "ModelTableWhitelist"]
