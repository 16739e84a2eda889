# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Handlers module for hera_infra.

Available Handlers:
- DbHandler: PostgreSQL session factory (asyncpg pool, statement timeout)
- HeraToolDispatcher: hera.* tool surface with the uniform result envelope
- EntityUpsertGateway: guardrail-checked calls to hera_entity_upsert_v1
"""

from hera_infra.handlers.handler_db import HANDLER_TYPE_DB, DbHandler, DbSession
from hera_infra.handlers.handler_entity_upsert import (
    ENTITY_UPSERT_SQL,
    EntityUpsertGateway,
    build_upsert_params,
)
from hera_infra.handlers.handler_tools import (
    TOOL_CONFIG_PREVIEW,
    TOOL_LABELS_GET,
    TOOL_REPORT_RUN,
    TOOL_SELECT,
    HeraToolDispatcher,
    ToolDefinition,
)

__all__: list[str] = [
    "DbHandler",
    "DbSession",
    "ENTITY_UPSERT_SQL",
    "EntityUpsertGateway",
    "HANDLER_TYPE_DB",
    "HeraToolDispatcher",
    "TOOL_CONFIG_PREVIEW",
    "TOOL_LABELS_GET",
    "TOOL_REPORT_RUN",
    "TOOL_SELECT",
    "ToolDefinition",
    "build_upsert_params",
]
