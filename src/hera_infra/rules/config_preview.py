# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Configuration preview: test candidate rules before promoting them.

Each test case is resolved against the candidate rules and, when
``compare_current`` is set, against the organization's stored rules for the
same key. The difference is reported per case with an impact level.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from hera_infra.enums import EnumImpactLevel
from hera_infra.models import (
    ModelConfigPreviewRequest,
    ModelConfigRule,
    ModelPreviewResult,
)
from hera_infra.protocols import ProtocolDbSessionFactory
from hera_infra.rules.config_rule_store import load_stored_rules
from hera_infra.rules.rule_resolver import classify_impact, resolve_rules
from hera_infra.runtime import TrustedOrgId

logger = logging.getLogger(__name__)


def _summarize(results: list[ModelPreviewResult]) -> dict[str, Any]:
    impact = {level.value: 0 for level in EnumImpactLevel}
    for result in results:
        impact[result.impact.value] += 1
    return {
        "total": len(results),
        "passed": sum(1 for r in results if r.passed is True),
        "failed": sum(1 for r in results if r.passed is False),
        "changed": sum(1 for r in results if r.changed_from_current),
        "impact": impact,
    }


def preview_rules(
    request: ModelConfigPreviewRequest,
    current_rules: list[ModelConfigRule] | None = None,
) -> dict[str, Any]:
    """Resolve every test case; compare with ``current_rules`` when given."""
    results: list[ModelPreviewResult] = []
    for index, case in enumerate(request.test_cases, start=1):
        resolved = resolve_rules(request.test_rules, case.context)
        current: Any = None
        impact = EnumImpactLevel.NONE
        if current_rules is not None:
            current = resolve_rules(current_rules, case.context)
            impact = classify_impact(current, resolved)
        results.append(
            ModelPreviewResult(
                name=case.name or f"case_{index}",
                resolved_value=resolved,
                current_value=current,
                changed_from_current=impact is not EnumImpactLevel.NONE,
                impact=impact,
                passed=(resolved == case.expected) if case.has_expected else None,
            )
        )
    return {
        "config_key": request.config_key,
        "results": [r.model_dump(mode="json") for r in results],
        "summary": _summarize(results),
    }


async def run_config_preview(
    db: ProtocolDbSessionFactory | None,
    org_id: TrustedOrgId,
    params: ModelConfigPreviewRequest | Mapping[str, Any],
    correlation_id: UUID | None = None,
) -> dict[str, Any]:
    """Run hera.config.preview; stored rules are loaded only for ``compare_current``."""
    if not isinstance(params, ModelConfigPreviewRequest):
        params = ModelConfigPreviewRequest.model_validate(dict(params))

    current_rules: list[ModelConfigRule] | None = None
    if params.compare_current:
        if db is None:
            raise ValueError("compare_current requires a database session factory")
        async with db.session(correlation_id) as session:
            current_rules = await load_stored_rules(session, org_id.value, params.config_key)

    response = preview_rules(params, current_rules)
    logger.info(
        "hera.config.preview completed",
        extra={
            "config_key": params.config_key,
            "test_cases": len(params.test_cases),
            "stored_rules": None if current_rules is None else len(current_rules),
            "correlation_id": str(correlation_id) if correlation_id else None,
        },
    )
    return response


__all__ = ["preview_rules", "run_config_preview"]
