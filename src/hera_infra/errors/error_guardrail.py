# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Guardrail violation error raised by the entity upsert gateway."""

from __future__ import annotations

from hera_infra.enums import EnumInfraErrorCode
from hera_infra.errors.infra_errors import RuntimeHostError
from hera_infra.errors.model_infra_error_context import ModelInfraErrorContext


class GuardrailViolationError(RuntimeHostError):
    """Raised when a write request fails guardrail validation.

    Attributes:
        violations: Rule-prefixed violation messages, e.g.
            ``"[Smart Code Validation] Invalid smart code format: X"``.
        warnings: Non-blocking findings from the same run.
    """

    def __init__(
        self,
        violations: list[str],
        warnings: list[str] | None = None,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        self.violations = list(violations)
        self.warnings = list(warnings or [])
        super().__init__(
            message=f"Request failed validation checks: {'; '.join(self.violations)}",
            error_code=EnumInfraErrorCode.VALIDATION_ERROR,
            context=context,
            violation_count=len(self.violations),
            **extra_context,
        )


__all__ = ["GuardrailViolationError"]
