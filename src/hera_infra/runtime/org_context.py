# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Trusted organization scope.

The organization id is the tenant-isolation root of trust for every tool.
It is resolved from process configuration only (``HERA_ORG_ID``, then
``DEFAULT_ORGANIZATION_ID``) and is wrapped in ``TrustedOrgId``, an opaque
value that compilers and executors require as the first SQL parameter.

``TrustedOrgId`` refuses construction without the module-private token, so a
caller-supplied string cannot be threaded into a query by accident:

    >>> TrustedOrgId("some-org")
    Traceback (most recent call last):
    TypeError: TrustedOrgId can only be created by resolve_trusted_org_id()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from uuid import UUID

from hera_infra.enums import EnumInfraTransportType
from hera_infra.errors import ModelInfraErrorContext, OrgContextMissingError

logger = logging.getLogger(__name__)

ORG_ID_ENV_VARS: tuple[str, ...] = ("HERA_ORG_ID", "DEFAULT_ORGANIZATION_ID")

_CONSTRUCTION_TOKEN = object()


class TrustedOrgId:
    """Organization id resolved from server-side configuration."""

    __slots__ = ("_value",)

    def __init__(self, value: str, _token: object = None) -> None:
        if _token is not _CONSTRUCTION_TOKEN:
            raise TypeError(
                "TrustedOrgId can only be created by resolve_trusted_org_id()"
            )
        self._value = value

    @property
    def value(self) -> str:
        """Return the organization id string bound as SQL parameter 1."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TrustedOrgId):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"TrustedOrgId({self._value!r})"

    def __str__(self) -> str:
        return self._value


def resolve_trusted_org_id(
    environ: Mapping[str, str] | None = None,
    correlation_id: UUID | None = None,
) -> TrustedOrgId:
    """Resolve the organization scope from trusted process configuration.

    Args:
        environ: Environment mapping to read; defaults to ``os.environ``.
            Never pass caller-supplied request data here.
        correlation_id: Optional correlation ID for error context.

    Returns:
        The trusted organization id.

    Raises:
        OrgContextMissingError: If neither HERA_ORG_ID nor
            DEFAULT_ORGANIZATION_ID is set to a non-blank value.
    """
    env = os.environ if environ is None else environ
    for name in ORG_ID_ENV_VARS:
        raw = env.get(name)
        if raw and raw.strip():
            return TrustedOrgId(raw.strip(), _CONSTRUCTION_TOKEN)

    logger.warning(
        "Organization context missing",
        extra={
            "env_vars": list(ORG_ID_ENV_VARS),
            "correlation_id": str(correlation_id) if correlation_id else None,
        },
    )
    raise OrgContextMissingError(
        context=ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.RUNTIME,
            operation="resolve_org_id",
            correlation_id=correlation_id,
        )
    )


__all__ = ["ORG_ID_ENV_VARS", "TrustedOrgId", "resolve_trusted_org_id"]
