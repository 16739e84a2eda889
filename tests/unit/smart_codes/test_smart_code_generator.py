# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Unit tests for smart code generation, suggestion and migration."""

from __future__ import annotations

import itertools

import pytest

from hera_infra.models import ModelSmartCodeIntent
from hera_infra.smart_codes import (
    generate_app_config_smart_code,
    generate_smart_code,
    is_valid_smart_code,
    migrate_to_domain_v2,
    suggest_smart_code,
    to_segment,
)

INDUSTRIES = ["salon", "restaurant", "healthcare", "retail", "real estate", "", None]
ENTITY_TYPES = ["app_config", "customer", "GL account", "ENTITY"]
OPERATIONS = [None, "CREATE", "VALIDATE", "LOAD", "create"]
DATA_TYPES = [None, "json", "csv-import"]


class TestGenerateSmartCode:
    @pytest.mark.unit
    def test_industry_app_config(self) -> None:
        assert (
            generate_smart_code(entity_type="app_config", industry="real estate")
            == "HERA.PLATFORM.CONFIG.APP.REAL_ESTATE.v2"
        )

    @pytest.mark.unit
    def test_validate_takes_precedence(self) -> None:
        code = generate_smart_code(industry="salon", operation_type="VALIDATE")

        assert code == "HERA.PLATFORM.CONFIG.VALIDATION.SCHEMA.v2"

    @pytest.mark.unit
    def test_operation_code(self) -> None:
        assert (
            generate_smart_code(entity_type="customer", operation_type="load")
            == "HERA.PLATFORM.CONFIG.CUSTOMER.LOAD.v2"
        )

    @pytest.mark.unit
    def test_data_type_code(self) -> None:
        assert (
            generate_smart_code({"entity_type": "x", "data_type": "csv-import"})
            == "HERA.PLATFORM.CONFIG.DATA.CSV_IMPORT.v2"
        )

    @pytest.mark.unit
    def test_entity_fallback(self) -> None:
        assert generate_smart_code() == "HERA.PLATFORM.CONFIG.ENTITY.ENTITY.v2"

    @pytest.mark.unit
    def test_deterministic(self) -> None:
        intent = ModelSmartCodeIntent(entity_type="customer", operation_type="CREATE")

        assert generate_smart_code(intent) == generate_smart_code(intent)

    @pytest.mark.unit
    def test_unknown_operation_rejected(self) -> None:
        with pytest.raises(ValueError, match="operation_type"):
            generate_smart_code(operation_type="DELETE")

    @pytest.mark.unit
    def test_every_generated_code_validates(self) -> None:
        for entity, industry, operation, data_type in itertools.product(
            ENTITY_TYPES, INDUSTRIES, OPERATIONS, DATA_TYPES
        ):
            code = generate_smart_code(
                entity_type=entity,
                industry=industry,
                operation_type=operation,
                data_type=data_type,
            )
            assert is_valid_smart_code(code), (entity, industry, operation, data_type, code)

    @pytest.mark.unit
    @pytest.mark.parametrize("config_type", ["APP", "theme", "feature flags"])
    def test_app_config_codes_validate(self, config_type: str) -> None:
        for industry in INDUSTRIES:
            code = generate_app_config_smart_code(industry, config_type)
            assert is_valid_smart_code(code), code


class TestToSegment:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("real estate", "REAL_ESTATE"),
            ("  --salon--  ", "SALON"),
            ("", "GENERIC"),
            (None, "GENERIC"),
            ("a.b", "A_B"),
        ],
    )
    def test_to_segment(self, raw: object, expected: str) -> None:
        assert to_segment(raw) == expected


class TestSuggestSmartCode:
    @pytest.mark.unit
    def test_valid_code_returned_unchanged(self) -> None:
        code = "HERA.SALON.SVC.v2"

        assert suggest_smart_code(code) == code

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("hera.salon.svc", "HERA.SALON.SVC.v2"),
            ("HERA.PLATFORM.APP.v1", "HERA.PLATFORM.CONFIG.APP.GENERIC.v2"),
            ("", "HERA.PLATFORM.CONFIG.GENERIC.GENERIC.v2"),
            ("HERA.ACCOUNTING.GL.1ST.v1", "HERA.ACCOUNTING.GL.N1ST.v2"),
            ("retail", "HERA.RETAIL.GENERIC.v2"),
        ],
    )
    def test_suggestions(self, raw: str, expected: str) -> None:
        suggestion = suggest_smart_code(raw)

        assert suggestion == expected
        assert is_valid_smart_code(suggestion)


class TestMigrateToDomainV2:
    @pytest.mark.unit
    def test_migrates_data_layer_code(self) -> None:
        migrated = migrate_to_domain_v2("HERA.SALON.SVC.HAIRCUT.STD.v1")

        assert migrated == "HERA.SALON.SVC.HAIRCUT.STD.v2"
        assert is_valid_smart_code(migrated)

    @pytest.mark.unit
    def test_platform_gains_config_segment(self) -> None:
        migrated = migrate_to_domain_v2("HERA.PLATFORM.APP.THEME.DARK.v3")

        assert migrated == "HERA.PLATFORM.CONFIG.APP.THEME.DARK.v2"

    @pytest.mark.unit
    def test_invalid_input_rejected(self) -> None:
        with pytest.raises(ValueError, match="INVALID_FORMAT"):
            migrate_to_domain_v2("HERA.SALON.SVC.v1")
