# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Alarm records stored as fenced ``KEY: value`` blocks in a reference channel.

Example::

    ```
    USER_ID: 1234
    USERNAME: "ava"
    TIME: "07:30"
    ENABLED: true
    CREATED: 2025-10-05T14:30:00+00:00
    ```
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from services.exceptions import InvalidReminderTimeError

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")
RECORD_MARKER = "USER_ID:"


@dataclass
class AlarmRecord:
    user_id: int
    username: str
    time: str
    enabled: bool = True
    created: Optional[str] = None
    message_id: Optional[int] = None
    last_fired: str = ""


def normalize_time(value: str) -> str:
    """Validate a 24-hour ``H:MM``/``HH:MM`` time and zero-pad it."""
    match = TIME_PATTERN.match((value or "").strip())
    if not match:
        raise InvalidReminderTimeError(
            "Invalid time format. Use HH:MM (24-hour)", details={'value': value}
        )
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def serialize_alarm(alarm: AlarmRecord) -> str:
    created = alarm.created or datetime.now(timezone.utc).isoformat()
    lines = [
        f"USER_ID: {alarm.user_id}",
        f'USERNAME: "{alarm.username}"',
        f'TIME: "{alarm.time}"',
        f"ENABLED: {'true' if alarm.enabled else 'false'}",
        f"CREATED: {created}",
    ]
    return "```\n" + "\n".join(lines) + "\n```"


def _fields(content: str) -> Dict[str, str]:
    fields = {}
    for line in content.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip().isupper():
            fields[key.strip()] = value.strip().strip('"')
    return fields


def parse_alarm(content: str, message_id: Optional[int] = None) -> Optional[AlarmRecord]:
    """Decode an alarm record; ``None`` for anything malformed."""
    if not content or RECORD_MARKER not in content:
        return None

    fields = _fields(content.replace("```", ""))
    try:
        return AlarmRecord(
            user_id=int(fields["USER_ID"]),
            username=fields["USERNAME"],
            time=normalize_time(fields["TIME"]),
            enabled=fields.get("ENABLED", "true").lower() == "true",
            created=fields.get("CREATED"),
            message_id=message_id,
        )
    except (KeyError, ValueError, InvalidReminderTimeError):
        return None
