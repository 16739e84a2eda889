# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Smart code validation result and generation intent."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hera_infra.enums import EnumSmartCodeDialect, EnumSmartCodeError


class ModelSmartCodeValidation(BaseModel):
    """Outcome of validating a smart code against one dialect."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_valid: bool
    dialect: EnumSmartCodeDialect
    domain: str | None = None
    error_code: EnumSmartCodeError | None = None
    segments: list[str] = Field(default_factory=list)


class ModelSmartCodeIntent(BaseModel):
    """What a generated smart code should classify.

    Attributes:
        entity_type: Entity type the code is for (e.g. ``app_config``).
        industry: Optional industry; produces an APP config code.
        operation_type: Optional CREATE, VALIDATE or LOAD.
        data_type: Optional data type classification.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entity_type: str = "ENTITY"
    industry: str | None = None
    operation_type: str | None = None
    data_type: str | None = None


__all__ = ["ModelSmartCodeIntent", "ModelSmartCodeValidation"]
