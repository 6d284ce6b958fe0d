# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Data model shared by the tracking services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

CHALLENGE_DAYS = 75
DAYS_PER_ROW = 10
DEFAULT_CHEAT_DAYS = 3


class DayStatus(str, Enum):
    FUTURE = "future"
    MISSED = "missed"
    COMPLETED = "completed"


def day_state_character(day: int) -> str:
    """Grid character for a completed *day*: its position within the 10-day row, ``0`` for the tenth."""
    day_in_row = ((day - 1) % DAYS_PER_ROW) + 1
    return "0" if day_in_row == DAYS_PER_ROW else str(day_in_row)


@dataclass(frozen=True)
class DayState:
    """State of one history slot.

    ``day`` is the 1-based challenge day and is only set for completed slots.
    """

    status: DayStatus
    day: int = 0

    @classmethod
    def future(cls) -> "DayState":
        return cls(DayStatus.FUTURE)

    @classmethod
    def missed(cls) -> "DayState":
        return cls(DayStatus.MISSED)

    @classmethod
    def completed(cls, day: int) -> "DayState":
        return cls(DayStatus.COMPLETED, day)

    @property
    def is_future(self) -> bool:
        return self.status is DayStatus.FUTURE

    @property
    def is_completed(self) -> bool:
        return self.status is DayStatus.COMPLETED

    @property
    def symbol(self) -> str:
        if self.status is DayStatus.FUTURE:
            return "."
        if self.status is DayStatus.MISSED:
            return "x"
        return day_state_character(self.day)


def default_history(current_day: int, length: int = CHALLENGE_DAYS) -> List[DayState]:
    """Missed for every day up to *current_day*, future afterwards."""
    return [
        DayState.missed() if day <= current_day else DayState.future()
        for day in range(1, length + 1)
    ]


@dataclass
class Participant:
    """A tracked member of the challenge group."""

    name: str
    current_status: bool = False
    history: List[DayState] = field(default_factory=list)
    cheat_days_available: int = DEFAULT_CHEAT_DAYS

    def copy(self) -> "Participant":
        return Participant(
            name=self.name,
            current_status=self.current_status,
            history=list(self.history),
            cheat_days_available=self.cheat_days_available,
        )

    def history_symbols(self) -> str:
        return "".join(state.symbol for state in self.history)


@dataclass(frozen=True)
class DailyResource:
    """Tracking metadata decoded from a daily thread name.

    ``date_tag`` is ``MM-DD-YY`` for canonical names and ``None`` for the
    legacy ``{participant}-day-{N}`` encoding.
    """

    day: int
    participant: str
    date_tag: Optional[str] = None
    archived: bool = False
    legacy: bool = False
    resource_id: Optional[int] = None


@dataclass(frozen=True)
class GuildMember:
    """A guild member as seen by the tracker."""

    id: int
    name: str
    display_name: str
    is_bot: bool = False
