# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Cheat Day Services - allowance ledger and cheat day threads
"""

from .cheat_ledger import parse_ledger, serialize_ledger
from .cheat_service import CheatService

__all__ = ['CheatService', 'parse_ledger', 'serialize_ledger']
