# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Text rendering of the status and history panels.

Both panels are posted as fenced code blocks so Discord keeps the
fixed-width layout.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from utils.time_utils import format_panel_timestamp, wrap_footer

from .models import DAYS_PER_ROW, Participant

PANEL_WIDTH = 37
FOOTER_WIDTH = PANEL_WIDTH - 2

STATUS_COMPLETED = "COMPLETED"
STATUS_NOT_COMPLETED = "NOT COMPLETED"

_TITLE = "❊ STATUSES"


def _fence(lines: Iterable[str]) -> str:
    return "```\n" + "\n".join(lines) + "\n```"


def status_line(name: str, completed: bool) -> str:
    status = STATUS_COMPLETED if completed else STATUS_NOT_COMPLETED
    padding = max(1, PANEL_WIDTH - (len(name) + 2) - len(status))
    return f"│ {name}{' ' * padding}{status} │"


def render_status_panel(participants: Iterable[Participant], now: datetime) -> str:
    """Framed ``name  COMPLETED|NOT COMPLETED`` list with a timestamp footer.

    *participants* are expected in display order (see ``ProgressStore.snapshot``);
    *now* must already be in the tracker timezone.
    """
    separator = "├" + "─" * PANEL_WIDTH + "┤"
    lines: List[str] = [
        "╭" + "─" * PANEL_WIDTH + "╮",
        "│" + " " * 14 + _TITLE + " " * 13 + "│",
        separator,
    ]
    lines.extend(status_line(p.name, p.current_status) for p in participants)
    lines.append(separator)

    for part in wrap_footer(format_panel_timestamp(now), FOOTER_WIDTH):
        lines.append("│ " + part.ljust(FOOTER_WIDTH) + " │")

    lines.append("╰" + "─" * PANEL_WIDTH + "╯")
    return _fence(lines)


def history_rows(participant: Participant, current_day: int) -> List[str]:
    """Numbered rows of ten characters covering the whole history.

    A 75-day challenge gives eight rows, the last one holding five.
    """
    symbols = [
        "." if day > current_day else state.symbol
        for day, state in enumerate(participant.history, start=1)
    ]
    return [
        f"{row} {''.join(symbols[start:start + DAYS_PER_ROW])}"
        for row, start in enumerate(range(0, len(symbols), DAYS_PER_ROW), start=1)
    ]


def render_history_panel(participants: Iterable[Participant], current_day: int) -> str:
    lines: List[str] = []
    for participant in participants:
        if lines:
            lines.append("")
        lines.append(f"{participant.name}:")
        lines.extend(history_rows(participant, current_day))
    return _fence(lines)
