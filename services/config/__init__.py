# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Config Services Package - Unified configuration service
"""

from .config_service import (
    ConfigService,
    RequirementSpec,
    TrackerConfig,
    get_config_service,
    load_config,
    reset_config_service,
)

__all__ = [
    'ConfigService', 'RequirementSpec', 'TrackerConfig',
    'get_config_service', 'load_config', 'reset_config_service',
]
