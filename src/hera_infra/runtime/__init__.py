# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Runtime configuration and trusted organization context."""

from hera_infra.runtime.org_context import (
    ORG_ID_ENV_VARS,
    TrustedOrgId,
    resolve_trusted_org_id,
)
from hera_infra.runtime.runtime_config import ModelToolRuntimeConfig

__all__: list[str] = [
    "ORG_ID_ENV_VARS",
    "ModelToolRuntimeConfig",
    "TrustedOrgId",
    "resolve_trusted_org_id",
]
