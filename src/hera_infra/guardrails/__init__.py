# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Write-path guardrails for universal entity and transaction requests."""

from hera_infra.guardrails.guardrails_engine import (
    DEFAULT_RULES,
    PLATFORM_ORGANIZATION_ID,
    GuardrailRule,
    GuardrailsEngine,
    RuleOutcome,
)

__all__: list[str] = [
    "DEFAULT_RULES",
    "PLATFORM_ORGANIZATION_ID",
    "GuardrailRule",
    "GuardrailsEngine",
    "RuleOutcome",
]
