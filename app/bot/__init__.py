# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Utilities for constructing and running the Discord bot runtime."""

from .runtime import BotRuntime, build_runtime  # noqa: F401
from .factory import create_bot  # noqa: F401
from .events import register_event_handlers  # noqa: F401
from .services import TrackerServices, build_services  # noqa: F401
