# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Guardrails engine for universal write requests.

Every rule runs on every request. A rule returns violations (blocking) and
warnings (advisory); both are prefixed with the rule name, e.g.
``"[GL Balance Enforcement] GL not balanced for USD: ..."``. A rule that
raises is recorded as a violation of that rule instead of aborting the run.

Rule levels, highest first:

CRITICAL
    Organization Boundary Enforcement, Actor Authentication Validation,
    Platform Organization Protection
HIGH
    Smart Code Validation, GL Balance Enforcement, Transaction Integrity,
    Entity Relationship Validation
MEDIUM
    Payload Structure Validation, Business Logic Validation,
    Data Type Validation
LOW
    Field Format Validation, Performance Guidelines
"""

from __future__ import annotations

import datetime
import json
import logging
import math
import re
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from hera_infra.enums import EnumSecurityLevel, EnumSmartCodeDialect
from hera_infra.models import ModelGuardrailContext, ModelGuardrailResult
from hera_infra.rules.condition_evaluator import js_number
from hera_infra.smart_codes import validate_smart_code

logger = logging.getLogger(__name__)

PLATFORM_ORGANIZATION_ID: str = "00000000-0000-0000-0000-000000000000"
NULL_UUID: str = PLATFORM_ORGANIZATION_ID
GL_BALANCE_TOLERANCE: float = 0.01
MAX_PAYLOAD_BYTES: int = 1_000_000
MAX_LINES: int = 1000
MAX_DYNAMIC_FIELDS: int = 100
MAX_TEXT_LENGTH: int = 10_000

VALID_OPERATIONS: frozenset[str] = frozenset(
    {"CREATE", "READ", "UPDATE", "DELETE", "APPROVE", "REVERSE", "UPSERT"}
)
SYSTEM_OPERATIONS: frozenset[str] = frozenset(
    {"SYSTEM_CREATE", "SYSTEM_UPDATE", "RESOLVE_IDENTITY", "AUTHENTICATE"}
)
STANDARD_RELATIONSHIP_TYPES: frozenset[str] = frozenset(
    {
        "HAS_STATUS",
        "PARENT_OF",
        "MEMBER_OF",
        "CUSTOMER_OF",
        "SUPPLIER_OF",
        "OWNS",
        "ASSIGNED_TO",
    }
)
STANDARD_FINANCE_TYPES: frozenset[str] = frozenset(
    {"sale", "purchase", "payment", "receipt", "journal_entry"}
)

_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class RuleOutcome:
    """Findings of one rule."""

    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GuardrailRule:
    name: str
    level: EnumSecurityLevel
    validator: Callable[[ModelGuardrailContext], RuleOutcome]


def _is_system_operation(operation: str) -> bool:
    return operation.upper() in SYSTEM_OPERATIONS


def _dicts(value: object) -> Iterator[dict[str, Any]]:
    if isinstance(value, list):
        for item in value:
            if isinstance(item, dict):
                yield item


def _is_valid_date(value: object) -> bool:
    try:
        datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _is_valid_email(value: object) -> bool:
    return isinstance(value, str) and bool(_EMAIL.match(value))


def check_organization_boundary(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    payload = ctx.payload
    payload_org = payload.get("organization_id")
    if not payload_org:
        out.violations.append("organization_id is required in all requests")
    elif payload_org != ctx.org_id:
        out.violations.append(
            f"organization_id mismatch: payload({payload_org}) vs context({ctx.org_id})"
        )
    entity_data = payload.get("entity_data")
    if isinstance(entity_data, dict):
        entity_org = entity_data.get("organization_id")
        if entity_org and entity_org != ctx.org_id:
            out.violations.append("Cross-organization entity reference detected")
    for rel in _dicts(payload.get("relationships")):
        if rel.get("organization_id") and rel["organization_id"] != ctx.org_id:
            out.violations.append("Cross-organization relationship detected")
    return out


def check_actor_authentication(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    if not _UUID.match(ctx.actor_user_entity_id):
        out.violations.append("Invalid actor user entity ID format")
    if not _UUID.match(ctx.org_id):
        out.violations.append("Invalid organization ID format")
    if ctx.actor_user_entity_id == NULL_UUID:
        out.violations.append("Null UUID actor not allowed")
    return out


def check_platform_organization(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    system_op = _is_system_operation(ctx.operation)
    if ctx.org_id == PLATFORM_ORGANIZATION_ID:
        if not system_op:
            out.violations.append(
                "Platform organization access restricted to system operations"
            )
        if ctx.operation.upper() == "CREATE" and ctx.payload.get("entity_type") != "USER":
            out.violations.append("Platform organization can only create USER entities")
    if ctx.payload.get("organization_id") == PLATFORM_ORGANIZATION_ID and not system_op:
        out.violations.append("Cannot create business entities in platform organization")
    return out


def _data_layer_valid(code: object) -> bool:
    return validate_smart_code(code, EnumSmartCodeDialect.DATA_LAYER).is_valid


def check_smart_codes(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    payload = ctx.payload
    code = payload.get("smart_code")
    if code and not _data_layer_valid(code):
        out.violations.append(f"Invalid smart code format: {code}")
    entity_data = payload.get("entity_data")
    if isinstance(entity_data, dict):
        entity_code = entity_data.get("smart_code")
        if entity_code and not _data_layer_valid(entity_code):
            out.violations.append(f"Invalid entity smart code: {entity_code}")
    for dyn in _dicts(payload.get("dynamic_fields")):
        if dyn.get("smart_code") and not _data_layer_valid(dyn["smart_code"]):
            out.violations.append(f"Invalid dynamic field smart code: {dyn['smart_code']}")
    for line in _dicts(payload.get("lines")):
        if line.get("smart_code") and not _data_layer_valid(line["smart_code"]):
            out.violations.append(
                f"Invalid transaction line smart code: {line['smart_code']}"
            )
    return out


def _is_gl_line(line: dict[str, Any]) -> bool:
    return ".GL." in str(line.get("smart_code") or "")


def check_gl_balance(ctx: ModelGuardrailContext) -> RuleOutcome:
    """Debits must equal credits per currency, within 0.01."""
    out = RuleOutcome()
    totals: dict[str, dict[str, float]] = {}
    for line in _dicts(ctx.payload.get("lines")):
        if not _is_gl_line(line):
            continue
        currency = str(
            line.get("transaction_currency_code") or line.get("currency") or "DOC"
        )
        line_data = line.get("line_data")
        side = line_data.get("side") if isinstance(line_data, dict) else None
        amount = js_number(line.get("line_amount") or 0)
        if side not in ("DR", "CR"):
            out.violations.append(f"GL line missing or invalid side: {side}")
            continue
        if amount < 0:
            out.violations.append(f"GL line amount cannot be negative: {amount}")
            continue
        if amount == 0:
            out.warnings.append("GL line has zero amount")
        bucket = totals.setdefault(currency, {"DR": 0.0, "CR": 0.0, "lines": 0})
        bucket[side] += amount
        bucket["lines"] += 1

    for currency, bucket in totals.items():
        difference = abs(bucket["DR"] - bucket["CR"])
        if difference > GL_BALANCE_TOLERANCE:
            out.violations.append(
                f"GL not balanced for {currency}: DR={bucket['DR']}, "
                f"CR={bucket['CR']}, Diff={round(difference, 6)}"
            )
        if bucket["lines"] < 2:
            out.warnings.append(
                f"GL transaction for {currency} has only {int(bucket['lines'])} line(s)"
            )
    return out


def check_transaction_integrity(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    if "/transactions" not in ctx.endpoint:
        return out
    txn = ctx.payload.get("transaction_data")
    if not isinstance(txn, dict):
        txn = ctx.payload

    number = txn.get("transaction_number")
    if number and (not isinstance(number, str) or len(number) < 3):
        out.violations.append(
            "Transaction number must be a string with at least 3 characters"
        )
    if not txn.get("transaction_type"):
        out.violations.append("Transaction type is required")

    if txn.get("total_amount") is not None:
        total = js_number(txn["total_amount"])
        if math.isnan(total) or total < 0:
            out.violations.append("Total amount must be a non-negative number")
        elif isinstance(ctx.payload.get("lines"), list):
            line_total = 0.0
            for line in _dicts(ctx.payload["lines"]):
                if _is_gl_line(line):
                    continue
                amount = js_number(line.get("line_amount"))
                line_total += 0.0 if math.isnan(amount) else amount
            if abs(total - line_total) > GL_BALANCE_TOLERANCE:
                out.violations.append(
                    f"Total amount ({total}) does not match line total ({line_total})"
                )

    source = txn.get("source_entity_id")
    if source and source == txn.get("target_entity_id"):
        out.warnings.append("Transaction source and target entities are the same")
    return out


def check_relationships(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    for rel in _dicts(ctx.payload.get("relationships")):
        if not rel.get("source_entity_id"):
            out.violations.append("Relationship missing source_entity_id")
        if not rel.get("target_entity_id"):
            out.violations.append("Relationship missing target_entity_id")
        rel_type = rel.get("relationship_type")
        if not rel_type:
            out.violations.append("Relationship missing relationship_type")
        elif isinstance(rel_type, str) and rel_type not in STANDARD_RELATIONSHIP_TYPES:
            out.warnings.append(f"Non-standard relationship type: {rel_type}")
        if rel.get("source_entity_id") == rel.get("target_entity_id"):
            out.warnings.append("Self-referencing relationship detected")
        if rel.get("organization_id") and rel["organization_id"] != ctx.org_id:
            out.violations.append(
                "Relationship organization_id must match context organization"
            )
    return out


def check_payload_structure(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    if not ctx.operation:
        out.violations.append("Operation field is required")
    elif ctx.operation.upper() not in VALID_OPERATIONS:
        out.violations.append(f"Invalid operation: {ctx.operation}")
    try:
        size = len(json.dumps(ctx.payload, default=str))
    except ValueError:
        out.violations.append("Payload contains circular references")
    else:
        if size > MAX_PAYLOAD_BYTES:
            out.violations.append(f"Payload too large: {size} bytes (max 1MB)")
    return out


def check_business_logic(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    payload = ctx.payload
    entity_type = payload.get("entity_type")
    if isinstance(entity_type, str):
        kind = entity_type.lower()
        if kind == "customer" and not payload.get("entity_name"):
            out.violations.append("Customer entities require entity_name")
        elif kind == "gl_account" and not payload.get("entity_code"):
            out.violations.append("GL account entities require entity_code")
        elif kind == "product" and payload.get("dynamic_fields"):
            names = {f.get("field_name") for f in _dicts(payload["dynamic_fields"])}
            if "price" not in names:
                out.warnings.append("Product entities should have a price field")

    if "/transactions" in ctx.endpoint and ctx.operation.upper() == "CREATE":
        txn_type = payload.get("transaction_type")
        if not txn_type:
            out.violations.append("Financial transactions require transaction_type")
        elif str(txn_type).lower() not in STANDARD_FINANCE_TYPES:
            out.warnings.append(f"Non-standard transaction type: {txn_type}")
    return out


def check_data_types(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    for dyn in _dicts(ctx.payload.get("dynamic_fields")):
        name = dyn.get("field_name")
        field_type = dyn.get("field_type")
        if not field_type:
            out.violations.append(f"Dynamic field {name} missing field_type")
            continue
        if field_type == "number":
            if "field_value_number" in dyn and math.isnan(
                js_number(dyn["field_value_number"])
            ):
                out.violations.append(f"Invalid number value for field {name}")
        elif field_type == "boolean":
            if "field_value_boolean" in dyn and not isinstance(
                dyn["field_value_boolean"], bool
            ):
                out.violations.append(f"Invalid boolean value for field {name}")
        elif field_type == "date":
            value = dyn.get("field_value_date")
            if value and not _is_valid_date(value):
                out.violations.append(f"Invalid date value for field {name}")
        elif field_type == "email":
            value = dyn.get("field_value")
            if value and not _is_valid_email(value):
                out.violations.append(f"Invalid email format for field {name}")
    return out


def check_field_formats(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    payload = ctx.payload
    if payload.get("email") and not _is_valid_email(payload["email"]):
        out.violations.append("Invalid email format")
    phone = payload.get("phone")
    if isinstance(phone, str) and phone and len(phone) < 10:
        out.warnings.append("Phone number seems too short")
    currency = payload.get("currency")
    if isinstance(currency, str) and currency and len(currency) != 3:
        out.warnings.append("Currency code should be 3 characters (ISO 4217)")
    return out


def _long_text_paths(value: object, path: str = "") -> Iterator[tuple[str, int]]:
    if isinstance(value, str):
        if len(value) > MAX_TEXT_LENGTH:
            yield path, len(value)
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from _long_text_paths(item, f"{path}.{key}" if path else str(key))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _long_text_paths(item, f"{path}.{index}" if path else str(index))


def check_performance(ctx: ModelGuardrailContext) -> RuleOutcome:
    out = RuleOutcome()
    lines = ctx.payload.get("lines")
    if isinstance(lines, list) and len(lines) > MAX_LINES:
        out.warnings.append(
            f"Large transaction with {len(lines)} lines may impact performance"
        )
    fields = ctx.payload.get("dynamic_fields")
    if isinstance(fields, list) and len(fields) > MAX_DYNAMIC_FIELDS:
        out.warnings.append(
            f"Entity with {len(fields)} dynamic fields may impact performance"
        )
    for path, length in _long_text_paths(ctx.payload):
        out.warnings.append(f"Large text field at {path}: {length} characters")
    return out


DEFAULT_RULES: tuple[GuardrailRule, ...] = (
    GuardrailRule("Organization Boundary Enforcement", EnumSecurityLevel.CRITICAL, check_organization_boundary),
    GuardrailRule("Actor Authentication Validation", EnumSecurityLevel.CRITICAL, check_actor_authentication),
    GuardrailRule("Platform Organization Protection", EnumSecurityLevel.CRITICAL, check_platform_organization),
    GuardrailRule("Smart Code Validation", EnumSecurityLevel.HIGH, check_smart_codes),
    GuardrailRule("GL Balance Enforcement", EnumSecurityLevel.HIGH, check_gl_balance),
    GuardrailRule("Transaction Integrity", EnumSecurityLevel.HIGH, check_transaction_integrity),
    GuardrailRule("Entity Relationship Validation", EnumSecurityLevel.HIGH, check_relationships),
    GuardrailRule("Payload Structure Validation", EnumSecurityLevel.MEDIUM, check_payload_structure),
    GuardrailRule("Business Logic Validation", EnumSecurityLevel.MEDIUM, check_business_logic),
    GuardrailRule("Data Type Validation", EnumSecurityLevel.MEDIUM, check_data_types),
    GuardrailRule("Field Format Validation", EnumSecurityLevel.LOW, check_field_formats),
    GuardrailRule("Performance Guidelines", EnumSecurityLevel.LOW, check_performance),
)


class GuardrailsEngine:
    """Runs an ordered rule set against a write request."""

    def __init__(self, rules: tuple[GuardrailRule, ...] = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[GuardrailRule, ...]:
        return self._rules

    def validate_request(self, ctx: ModelGuardrailContext) -> ModelGuardrailResult:
        """Run every rule and aggregate the findings.

        ``security_level`` is the highest level among rules that reported a
        violation, or LOW when the request is clean.
        """
        started = time.perf_counter()
        violations: list[str] = []
        warnings: list[str] = []
        level = EnumSecurityLevel.LOW
        checked = 0

        for rule in self._rules:
            checked += 1
            try:
                outcome = rule.validator(ctx)
            except Exception as e:
                logger.warning(
                    "Guardrail rule raised",
                    extra={"rule": rule.name, "error_type": type(e).__name__},
                )
                outcome = RuleOutcome(violations=[f"Validation error: {e}"])
            violations.extend(f"[{rule.name}] {v}" for v in outcome.violations)
            warnings.extend(f"[{rule.name}] {w}" for w in outcome.warnings)
            if outcome.violations and rule.level.rank > level.rank:
                level = rule.level

        return ModelGuardrailResult(
            is_valid=not violations,
            violations=violations,
            warnings=warnings,
            rules_checked=checked,
            security_level=level,
            validation_time_ms=round((time.perf_counter() - started) * 1000, 3),
        )

    def stats(self) -> dict[str, object]:
        """Summarize the configured rule set."""
        by_level: dict[str, int] = {}
        for rule in self._rules:
            by_level[rule.level.value] = by_level.get(rule.level.value, 0) + 1
        return {"total_rules": len(self._rules), "rules_by_level": by_level}


__all__ = [
    "DEFAULT_RULES",
    "GuardrailRule",
    "GuardrailsEngine",
    "PLATFORM_ORGANIZATION_ID",
    "RuleOutcome",
    "check_gl_balance",
    "check_organization_boundary",
    "check_smart_codes",
]
