# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""HERA Infrastructure Layer - organization-scoped data tools.

This package provides the safe, tenant-isolated data access layer used by
the HERA tool surface:

- Whitelist-driven SELECT compilation over the universal six tables
- Read-only report catalog with a per-call SQL safety gate
- Condition evaluation and priority rule resolution for configuration preview
- Smart code validation and generation (data-layer and domain v2 dialects)
- Guardrails and entity upsert gateway for the v2 universal entity API

Key Components:
    - HeraToolDispatcher: RPC surface (hera.select, hera.report.run, ...)
    - DbHandler: asyncpg pool with scoped sessions and statement timeout
    - TrustedOrgId: organization scope resolved only from server configuration
"""

__all__: list[str] = []
