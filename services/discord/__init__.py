# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Discord Services

Service-First architecture for Discord-specific operations.

Services:
- GuildGateway: member and thread listing, thread mutations, message upserts
- ErrorReportService: error reports posted to the error channel
"""

__all__ = [
    'ArchivedPage',
    'ErrorReportService',
    'GuildGateway',
    'RawResource',
]

from .error_report_service import ErrorReportService
from .guild_gateway import ArchivedPage, GuildGateway, RawResource
