# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Configuration rule and preview models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hera_infra.enums import EnumImpactLevel, EnumRuleType


class ModelConfigRule(BaseModel):
    """One candidate value for a configuration key.

    Attributes:
        config_key: Configuration key the rule applies to.
        rule_type: default, conditional or override.
        priority: Higher priorities are tried first.
        conditions: Condition tree; None means unconditional.
        config_value: Value produced when the rule wins.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    config_key: str = ""
    rule_type: EnumRuleType = EnumRuleType.CONDITIONAL
    priority: float = 0
    conditions: dict[str, Any] | None = None
    config_value: Any = None


class ModelPreviewTestCase(BaseModel):
    """A sample context to resolve during configuration preview."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    context: dict[str, Any] = Field(default_factory=dict)
    expected: Any = None

    @property
    def has_expected(self) -> bool:
        """True when the caller supplied ``expected``, even if it is None."""
        return "expected" in self.model_fields_set


class ModelPreviewResult(BaseModel):
    """Outcome of one preview test case."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    resolved_value: Any = None
    current_value: Any = None
    changed_from_current: bool = False
    impact: EnumImpactLevel = EnumImpactLevel.NONE
    passed: bool | None = None


class ModelConfigPreviewRequest(BaseModel):
    """Parameters of the configuration preview tool.

    Attributes:
        config_key: Key the candidate rules configure.
        test_rules: Candidate rules to evaluate.
        test_cases: Sample contexts, optionally with an expected value.
        compare_current: Also resolve against the stored rules for the key.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    config_key: str = Field(min_length=1)
    test_rules: list[ModelConfigRule] = Field(default_factory=list)
    test_cases: list[ModelPreviewTestCase] = Field(default_factory=list)
    compare_current: bool = False


__all__ = [
    "ModelConfigPreviewRequest",
    "ModelConfigRule",
    "ModelPreviewResult",
    "ModelPreviewTestCase",
]
