# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Reminder Services - daily DM alarms
"""

from .alarm_records import AlarmRecord, normalize_time, parse_alarm, serialize_alarm
from .reminder_service import ReminderService

__all__ = ['AlarmRecord', 'ReminderService', 'normalize_time', 'parse_alarm', 'serialize_alarm']
