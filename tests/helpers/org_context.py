# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Trusted organization fixtures built through the real resolver."""

from __future__ import annotations

from hera_infra.runtime import TrustedOrgId, resolve_trusted_org_id

TEST_ORG_ID: str = "3df8cc52-3d81-42d5-b088-7736ae26cc7c"
OTHER_ORG_ID: str = "9a1f2b4c-0000-4e5f-8a9b-112233445566"
TEST_ACTOR_ID: str = "5b6c7d8e-1234-4abc-9def-0123456789ab"


def trusted_org(value: str = TEST_ORG_ID) -> TrustedOrgId:
    """Resolve a TrustedOrgId from a throwaway environment mapping."""
    return resolve_trusted_org_id({"HERA_ORG_ID": value})


__all__ = ["OTHER_ORG_ID", "TEST_ACTOR_ID", "TEST_ORG_ID", "trusted_org"]
