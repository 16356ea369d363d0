# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the enrollment service.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from src.utils.datetime import (
    add_months,
    ensure_utc,
    parse_iso,
    start_of_hour,
    utc_now,
)
from src.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
    # Datetime
    "utc_now",
    "ensure_utc",
    "parse_iso",
    "start_of_hour",
    "add_months",
]
