# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Bootstrap utilities for preparing the Discord bot runtime.

Configuration loading and logging setup live here rather than in :mod:`bot`
so that importing the entry point has no side effects.
"""

from .runtime import (
    ensure_log_files,
    initialize_logging,
    load_main_configuration,
    resolve_timezone,
)

__all__ = [
    "ensure_log_files",
    "initialize_logging",
    "load_main_configuration",
    "resolve_timezone",
]
