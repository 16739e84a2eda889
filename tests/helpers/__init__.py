# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Test helpers for hera_infra unit tests.

Available Utilities:
    Database:
        - FakeDatabase: Deterministic session factory recording every statement
        - RecordedStatement: One recorded statement with its bound params

    Organization Context:
        - trusted_org: Build a TrustedOrgId through resolve_trusted_org_id
        - TEST_ORG_ID / OTHER_ORG_ID / TEST_ACTOR_ID: Fixed UUIDs

    Log Helpers:
        - get_warning_messages: Extract warning messages from log records
"""

from tests.helpers.fake_database import FakeDatabase, FakeSession, RecordedStatement
from tests.helpers.log_helpers import get_warning_messages
from tests.helpers.org_context import (
    OTHER_ORG_ID,
    TEST_ACTOR_ID,
    TEST_ORG_ID,
    trusted_org,
)

__all__ = [
    "FakeDatabase",
    "FakeSession",
    "OTHER_ORG_ID",
    "RecordedStatement",
    "TEST_ACTOR_ID",
    "TEST_ORG_ID",
    "get_warning_messages",
    "trusted_org",
]
