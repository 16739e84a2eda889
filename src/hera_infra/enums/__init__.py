# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""HERA infrastructure enumerations."""

from hera_infra.enums.enum_condition_operator import EnumConditionOperator
from hera_infra.enums.enum_dynamic_value_type import EnumDynamicValueType
from hera_infra.enums.enum_filter_operator import EnumFilterOperator
from hera_infra.enums.enum_impact_level import EnumImpactLevel
from hera_infra.enums.enum_infra_error_code import EnumInfraErrorCode
from hera_infra.enums.enum_infra_transport_type import EnumInfraTransportType
from hera_infra.enums.enum_report_format import EnumReportFormat
from hera_infra.enums.enum_rule_type import EnumRuleType
from hera_infra.enums.enum_security_level import EnumSecurityLevel
from hera_infra.enums.enum_smart_code_dialect import EnumSmartCodeDialect
from hera_infra.enums.enum_smart_code_error import EnumSmartCodeError
from hera_infra.enums.enum_tool_error_code import EnumToolErrorCode

__all__: list[str] = [
    "EnumConditionOperator",
    "EnumDynamicValueType",
    "EnumFilterOperator",
    "EnumImpactLevel",
    "EnumInfraErrorCode",
    "EnumInfraTransportType",
    "EnumReportFormat",
    "EnumRuleType",
    "EnumSecurityLevel",
    "EnumSmartCodeDialect",
    "EnumSmartCodeError",
    "EnumToolErrorCode",
]
