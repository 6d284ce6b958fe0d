# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Entry Services - daily entry threads and submission completion
"""

from .entry_service import EntryService
from .requirements import (
    DailyEntry,
    EntryState,
    RequirementKind,
    RequirementRecord,
    Submission,
    SubmissionOutcome,
    SubmissionResult,
    satisfies,
)

__all__ = [
    'EntryService',
    'DailyEntry', 'EntryState', 'RequirementKind', 'RequirementRecord',
    'Submission', 'SubmissionOutcome', 'SubmissionResult', 'satisfies',
]
