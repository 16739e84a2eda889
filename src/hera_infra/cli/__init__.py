# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Command line entry points for the HERA tools."""

from hera_infra.cli.cli_tools import cli, create_app

__all__: list[str] = ["cli", "create_app"]
