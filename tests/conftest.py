# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Pytest configuration and shared fixtures for hera_infra tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from hera_infra.reports import REPORT_CATALOG
from hera_infra.runtime import TrustedOrgId
from tests.helpers import FakeDatabase, trusted_org


@pytest.fixture
def org_id() -> TrustedOrgId:
    """Trusted organization scope for the test tenant."""
    return trusted_org()


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Empty fake database; tests replace ``responder`` as needed."""
    return FakeDatabase()


@pytest.fixture
def restore_report_catalog() -> Iterator[None]:
    """Snapshot the report catalog so a test may mutate templates."""
    snapshot = dict(REPORT_CATALOG)
    yield
    REPORT_CATALOG.clear()
    REPORT_CATALOG.update(snapshot)
