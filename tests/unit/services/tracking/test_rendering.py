# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Unit tests for the status and history panels."""

from datetime import datetime, timezone

import pytz

from services.tracking.models import DayState, Participant, default_history
from services.tracking.rendering import (
    PANEL_WIDTH,
    history_rows,
    render_history_panel,
    render_status_panel,
    status_line,
)
from utils.time_utils import format_panel_timestamp, wrap_footer

LOCAL_NOON = datetime(2025, 10, 8, 19, 0, tzinfo=timezone.utc).astimezone(
    pytz.timezone("America/Los_Angeles")
)


def _participant(name, completed=False, history=None):
    return Participant(name=name, current_status=completed, history=history or default_history(5))


def _inner_lines(panel):
    lines = panel.split("\n")
    assert lines[0] == "```"
    assert lines[-1] == "```"
    return lines[1:-1]


class TestStatusPanel:
    def test_status_line_is_right_aligned(self):
        line = status_line("ava", True)

        assert line == "│ ava" + " " * 23 + "COMPLETED │"
        assert len(line) == PANEL_WIDTH + 2

    def test_every_line_has_the_frame_width(self):
        panel = render_status_panel([_participant("ava", True), _participant("bo")], LOCAL_NOON)

        assert {len(line) for line in _inner_lines(panel)} == {PANEL_WIDTH + 2}

    def test_layout(self):
        panel = render_status_panel([_participant("ava", True), _participant("bo")], LOCAL_NOON)
        lines = _inner_lines(panel)

        assert lines[0] == "╭" + "─" * 37 + "╮"
        assert "❊ STATUSES" in lines[1]
        assert lines[2].startswith("├")
        assert lines[3].startswith("│ ava") and lines[3].endswith("COMPLETED │")
        assert lines[4].startswith("│ bo") and lines[4].endswith("NOT COMPLETED │")
        assert lines[5].startswith("├")
        assert lines[-1] == "╰" + "─" * 37 + "╯"

    def test_footer_carries_local_timestamp(self):
        panel = render_status_panel([_participant("ava")], LOCAL_NOON)
        footer = [line[2:-2].rstrip() for line in _inner_lines(panel)[5:-1]]

        assert footer == ["Wednesday, October 8 2025 at 12:00", "PM PDT"]

    def test_empty_panel(self):
        lines = _inner_lines(render_status_panel([], LOCAL_NOON))

        assert lines[2] == lines[3]


class TestTimestamp:
    def test_format(self):
        assert format_panel_timestamp(LOCAL_NOON) == "Wednesday, October 8 2025 at 12:00 PM PDT"

    def test_wrap_keeps_every_word(self):
        text = "Saturday, October 18 2025 at 09:05 AM PDT"

        assert " ".join(wrap_footer(text, 35)) == text
        assert all(len(part) <= 35 for part in wrap_footer(text, 35))


class TestHistoryPanel:
    def test_rows(self):
        history = default_history(5)
        history[2] = DayState.completed(3)
        history[4] = DayState.completed(5)

        rows = history_rows(_participant("ava", history=history), 5)

        assert len(rows) == 8
        assert rows[0] == "1 xx3x5....."
        assert rows[1] == "2 .........."
        assert rows[7] == "8 ....."

    def test_completed_tenth_day_renders_zero(self):
        history = default_history(20)
        history[9] = DayState.completed(10)
        history[19] = DayState.completed(20)

        rows = history_rows(_participant("ava", history=history), 20)

        assert rows[0] == "1 xxxxxxxxx0"

    def test_rows_follow_the_configured_length(self):
        history = default_history(12, length=30)
        history[11] = DayState.completed(12)

        rows = history_rows(_participant("ava", history=history), 12)

        assert rows == ["1 xxxxxxxxxx", "2 x2........", "3 .........."]
        assert rows[1] == "2 xxxxxxxxx0"

    def test_days_after_current_day_are_dots(self):
        history = default_history(75)

        rows = history_rows(_participant("ava", history=history), 3)

        assert rows[0] == "1 xxx......."

    def test_panel_lists_every_participant(self):
        panel = render_history_panel([_participant("ava"), _participant("bo")], 5)
        lines = _inner_lines(panel)

        assert lines[0] == "ava:"
        assert lines[9] == ""
        assert lines[10] == "bo:"
        assert len(lines) == 19
