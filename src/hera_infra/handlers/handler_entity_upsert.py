# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Entity upsert gateway for hera_entity_upsert_v1.

The gateway is the only write path in this package. It never builds SQL from
request data: it validates, runs the guardrails, then calls the stored
procedure with a fixed 17-argument positional contract::

    $1  organization id (trusted)     $10 tags
    $2  entity type                   $11 smart code status
    $3  entity name                   $12 business rules (jsonb)
    $4  smart code                    $13 metadata (jsonb)
    $5  entity id                     $14 ai confidence
    $6  entity code                   $15 ai classification
    $7  entity description            $16 ai insights (jsonb)
    $8  parent entity id              $17 actor user id
    $9  status

The procedure body lives in the database and is not reimplemented here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from hera_infra.enums import EnumInfraTransportType, EnumSmartCodeDialect
from hera_infra.errors import (
    GuardrailViolationError,
    ModelInfraErrorContext,
    RuntimeHostError,
)
from hera_infra.guardrails import GuardrailsEngine
from hera_infra.models import ModelEntityUpsertRequest, ModelGuardrailContext
from hera_infra.protocols import ProtocolDbSessionFactory
from hera_infra.runtime import TrustedOrgId
from hera_infra.smart_codes import validate_smart_code

logger = logging.getLogger(__name__)

UPSERT_OPERATION: str = "UPSERT"
UPSERT_ENDPOINT: str = "/entities"

ENTITY_UPSERT_SQL: str = (
    "SELECT hera_entity_upsert_v1("
    + ", ".join(f"${i}" for i in range(1, 18))
    + ")"
)


def build_upsert_params(
    org_id: TrustedOrgId,
    request: ModelEntityUpsertRequest,
    actor_user_id: str,
) -> list[object]:
    """Return the positional arguments of ``hera_entity_upsert_v1``."""
    return [
        org_id.value,
        request.entity_type,
        request.entity_name,
        request.smart_code,
        request.entity_id,
        request.entity_code,
        request.entity_description,
        request.parent_entity_id,
        request.status,
        request.tags,
        request.smart_code_status,
        request.business_rules,
        request.metadata,
        request.ai_confidence,
        request.ai_classification,
        request.ai_insights,
        actor_user_id,
    ]


def _extract_entity_id(value: object) -> str | None:
    # The procedure returns either the id itself or a jsonb envelope.
    if value is None:
        return None
    if isinstance(value, Mapping):
        for key in ("entity_id", "id"):
            if value.get(key):
                return str(value[key])
        data = value.get("data")
        return _extract_entity_id(data) if isinstance(data, Mapping) else None
    return str(value)


class EntityUpsertGateway:
    """Validate and persist a single entity through the stored procedure."""

    def __init__(
        self,
        db: ProtocolDbSessionFactory,
        guardrails: GuardrailsEngine | None = None,
    ) -> None:
        self._db = db
        self._guardrails = guardrails or GuardrailsEngine()

    async def upsert_entity(
        self,
        org_id: TrustedOrgId,
        request: ModelEntityUpsertRequest | Mapping[str, Any],
        actor_user_id: str,
        correlation_id: UUID | None = None,
    ) -> str:
        """Create or update an entity in the trusted organization.

        Args:
            org_id: Trusted organization scope, always argument ``$1``.
            request: Upsert body. A raw mapping may carry ``organization_id``;
                it is only checked against ``org_id``, never used.
            actor_user_id: Entity id of the authenticated user.
            correlation_id: Correlation ID for logs and errors.

        Returns:
            The id of the created or updated entity.

        Raises:
            GuardrailViolationError: If the body is malformed, the smart code
                is invalid, or any guardrail reports a violation.
            RuntimeHostError: If the procedure returns no entity id, or on
                database failure.
        """
        if not isinstance(org_id, TrustedOrgId):
            raise TypeError("upsert_entity requires a TrustedOrgId")

        ctx = ModelInfraErrorContext.with_correlation(
            correlation_id=correlation_id,
            transport_type=EnumInfraTransportType.DATABASE,
            operation="hera_entity_upsert_v1",
            target_name="core_entities",
        )

        raw: dict[str, Any]
        if isinstance(request, ModelEntityUpsertRequest):
            raw = request.model_dump(exclude_none=True)
            model = request
        else:
            raw = dict(request)
            try:
                model = ModelEntityUpsertRequest.model_validate(raw)
            except ValidationError as e:
                violations = [
                    f"[Payload Structure Validation] "
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]
                raise GuardrailViolationError(violations, context=ctx) from e

        validation = validate_smart_code(
            model.smart_code, EnumSmartCodeDialect.DATA_LAYER
        )
        if not validation.is_valid:
            reason = validation.error_code.value if validation.error_code else "INVALID"
            raise GuardrailViolationError(
                [
                    f"[Smart Code Validation] Invalid smart code format: "
                    f"{model.smart_code} ({reason})"
                ],
                context=ctx,
            )

        payload = {**raw, "organization_id": raw.get("organization_id", org_id.value)}
        result = self._guardrails.validate_request(
            ModelGuardrailContext(
                org_id=org_id.value,
                actor_user_entity_id=actor_user_id,
                operation=UPSERT_OPERATION,
                endpoint=UPSERT_ENDPOINT,
                payload=payload,
            )
        )
        if not result.is_valid:
            logger.warning(
                "Entity upsert blocked by guardrails",
                extra={
                    "entity_type": model.entity_type,
                    "violation_count": len(result.violations),
                    "security_level": result.security_level.value,
                    "correlation_id": str(ctx.correlation_id),
                },
            )
            raise GuardrailViolationError(
                result.violations, warnings=result.warnings, context=ctx
            )

        params = build_upsert_params(org_id, model, actor_user_id)
        async with self._db.session(ctx.correlation_id) as session:
            returned = await session.fetchval(ENTITY_UPSERT_SQL, params)

        entity_id = _extract_entity_id(returned)
        if entity_id is None:
            raise RuntimeHostError(
                "hera_entity_upsert_v1 returned no entity id", context=ctx
            )

        logger.info(
            "Entity upserted",
            extra={
                "entity_type": model.entity_type,
                "entity_id": entity_id,
                "warning_count": len(result.warnings),
                "correlation_id": str(ctx.correlation_id),
            },
        )
        return entity_id


__all__ = ["ENTITY_UPSERT_SQL", "EntityUpsertGateway", "build_upsert_params"]
