# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Reminder Service

Daily direct-message reminders for participants who have not completed
today's entry yet.  Alarms live as records in the alarms reference channel
and are checked on every reconciliation tick.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from services.exceptions import (
    DeliveryError,
    GatewayError,
    MissingConfigError,
    ReminderServiceError,
    RenderError,
)
from utils.logging_utils import get_module_logger

from .alarm_records import AlarmRecord, normalize_time, parse_alarm, serialize_alarm

logger = get_module_logger('reminders.reminder_service')

REMINDER_TEXT = "# ⏰⏰⏰\nSubmit some parts of your entry!"
ALARM_SCAN_LIMIT = 100


class ReminderService:
    """One alarm per member, fired at most once per day."""

    def __init__(self, gateway: Any, tracker: Any):
        self.gateway = gateway
        self.tracker = tracker
        self.alarms: Dict[int, AlarmRecord] = {}

    async def load_alarms(self) -> int:
        try:
            channel_id = self.tracker.config.require('alarms_ref_channel_id')
            messages = await self.gateway.fetch_recent_messages(channel_id, limit=ALARM_SCAN_LIMIT)
        except (MissingConfigError, GatewayError) as e:
            logger.error(f"Couldn't load alarms: {e}")
            return 0

        self.alarms = {}
        # history is newest first; the newest record per member wins
        for message in messages:
            alarm = parse_alarm(message.content, message_id=message.id)
            if alarm is None:
                continue
            self.alarms.setdefault(alarm.user_id, alarm)

        logger.info(f"Loaded {len(self.alarms)} alarms.")
        return len(self.alarms)

    async def set_reminder(self, user_id: int, username: str, time: str) -> AlarmRecord:
        """Create or replace the alarm of *user_id*.

        Raises:
            InvalidReminderTimeError: *time* is not a 24-hour ``HH:MM`` time
            ReminderServiceError: the record could not be persisted
        """
        normalized = normalize_time(time)
        existing = self.alarms.get(user_id)
        alarm = AlarmRecord(
            user_id=user_id,
            username=username,
            time=normalized,
            enabled=True,
            created=(existing.created if existing else None) or datetime.now(timezone.utc).isoformat(),
            message_id=existing.message_id if existing else None,
        )

        try:
            channel_id = self.tracker.config.require('alarms_ref_channel_id')
            alarm.message_id = await self.gateway.publish_or_update(
                channel_id, alarm.message_id, serialize_alarm(alarm)
            )
        except (MissingConfigError, RenderError) as e:
            raise ReminderServiceError(f"Could not save alarm: {e}", details={'user_id': user_id})

        self.alarms[user_id] = alarm
        logger.info(f"Alarm set for {username} at {normalized}.")
        return alarm

    def get_alarm(self, user_id: int) -> Optional[AlarmRecord]:
        return self.alarms.get(user_id)

    async def check_and_send_reminders(self, now: datetime) -> int:
        """Fire alarms due at *now* (local time); returns how many reminders were sent."""
        reading = now.strftime("%H:%M")
        today = now.date().isoformat()
        sent = 0

        for alarm in list(self.alarms.values()):
            if not alarm.enabled or alarm.time != reading or alarm.last_fired == today:
                continue
            alarm.last_fired = today

            if self.tracker.get_user_status(alarm.username):
                logger.debug(f"{alarm.username} already completed today; no reminder sent")
                continue

            try:
                await self.gateway.send_direct_message(alarm.user_id, REMINDER_TEXT)
            except DeliveryError as e:
                logger.error(f"Failed to send reminder to {alarm.username}: {e}")
                continue
            sent += 1
            logger.info(f"Sent reminder to {alarm.username}")
        return sent
