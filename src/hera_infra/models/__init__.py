# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Pydantic models shared across HERA infrastructure components."""

from hera_infra.models.model_compiled_query import (
    ModelCompiledQuery,
    ModelDroppedInputs,
)
from hera_infra.models.model_config_rule import (
    ModelConfigPreviewRequest,
    ModelConfigRule,
    ModelPreviewResult,
    ModelPreviewTestCase,
)
from hera_infra.models.model_db_handler_config import (
    ModelDbDescribeResponse,
    ModelDbHandlerConfig,
)
from hera_infra.models.model_entity_upsert_request import ModelEntityUpsertRequest
from hera_infra.models.model_guardrail import (
    ModelGuardrailContext,
    ModelGuardrailResult,
)
from hera_infra.models.model_query_result import ModelQueryResult
from hera_infra.models.model_report_definition import ModelReportDefinition
from hera_infra.models.model_select_request import (
    ModelEmbedFlags,
    ModelSelectRequest,
)
from hera_infra.models.model_smart_code import (
    ModelSmartCodeIntent,
    ModelSmartCodeValidation,
)
from hera_infra.models.model_table_whitelist import (
    ALL_COLUMNS,
    ModelFilterRule,
    ModelTableWhitelist,
)

__all__: list[str] = [
    "ALL_COLUMNS",
    "ModelCompiledQuery",
    "ModelConfigPreviewRequest",
    "ModelConfigRule",
    "ModelDbDescribeResponse",
    "ModelDbHandlerConfig",
    "ModelDroppedInputs",
    "ModelEmbedFlags",
    "ModelEntityUpsertRequest",
    "ModelFilterRule",
    "ModelGuardrailContext",
    "ModelGuardrailResult",
    "ModelPreviewResult",
    "ModelPreviewTestCase",
    "ModelQueryResult",
    "ModelReportDefinition",
    "ModelSelectRequest",
    "ModelSmartCodeIntent",
    "ModelSmartCodeValidation",
    "ModelTableWhitelist",
]
