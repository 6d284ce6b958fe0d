# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Scheduling Services - daily reset/finalize reconciliation loop
"""

from .reconciliation_service import (
    FINALIZE_READING,
    RESET_READING,
    ReconciliationService,
)
from .runtime import SchedulerRuntime, get_scheduler_runtime, reset_scheduler_runtime

__all__ = [
    'ReconciliationService',
    'RESET_READING', 'FINALIZE_READING',
    'SchedulerRuntime',
    'get_scheduler_runtime',
    'reset_scheduler_runtime',
]
