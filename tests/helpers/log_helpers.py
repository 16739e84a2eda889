# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Log record helpers for caplog-based assertions."""

from __future__ import annotations

import logging


def get_warning_messages(records: list[logging.LogRecord]) -> list[str]:
    """Return the messages of WARNING-level records."""
    return [r.getMessage() for r in records if r.levelno == logging.WARNING]


__all__ = ["get_warning_messages"]
