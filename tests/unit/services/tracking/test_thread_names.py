# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Unit tests for the thread name codec."""

import pytest

from services.exceptions import ResourceSkip, ThreadNameParseError
from services.tracking import thread_names
from services.tracking.models import DailyResource


class TestDecode:
    def test_canonical_name(self):
        resource = thread_names.decode("day-5-ava-10-08-25", resource_id=7)

        assert resource == DailyResource(day=5, participant="ava", date_tag="10-08-25", resource_id=7)
        assert not resource.archived
        assert not resource.legacy

    def test_archived_canonical_name(self):
        resource = thread_names.decode("archive-day-12-bo-10-15-25")

        assert resource.archived
        assert resource.day == 12
        assert resource.participant == "bo"
        assert resource.date_tag == "10-15-25"

    def test_legacy_name_has_no_date(self):
        resource = thread_names.decode("ava-day-3")

        assert resource.legacy
        assert resource.day == 3
        assert resource.participant == "ava"
        assert resource.date_tag is None

    def test_archived_legacy_name(self):
        resource = thread_names.decode("archive-ava-day-3")

        assert resource.archived
        assert resource.legacy

    @pytest.mark.parametrize("name", ["", "general chat", "day-x-ava-10-08-25", "archive-", "ava-day-"])
    def test_foreign_names_are_rejected(self, name):
        assert thread_names.decode(name) is None

    def test_out_of_range_day_still_decodes(self):
        resource = thread_names.decode("day-99-ava-10-08-25")

        assert resource.day == 99


class TestEncode:
    def test_canonical_form(self):
        assert thread_names.encode(5, "ava", "10-08-25") == "day-5-ava-10-08-25"

    def test_archived_form(self):
        assert thread_names.encode(5, "ava", "10-08-25", archived=True) == "archive-day-5-ava-10-08-25"

    def test_decode_reverses_encode(self):
        resource = thread_names.decode(thread_names.encode(42, "casey", "11-14-25"))

        assert (resource.day, resource.participant, resource.date_tag, resource.archived) == (
            42, "casey", "11-14-25", False
        )


class TestHelpers:
    def test_archived_name_adds_prefix_once(self):
        once = thread_names.archived_name("day-5-ava-10-08-25")

        assert once == "archive-day-5-ava-10-08-25"
        assert thread_names.archived_name(once) == once

    def test_is_archived_name(self):
        assert thread_names.is_archived_name("archive-day-5-ava-10-08-25")
        assert not thread_names.is_archived_name("day-5-ava-10-08-25")
        assert not thread_names.is_archived_name("")

    def test_parse_raises_for_foreign_names(self):
        with pytest.raises(ThreadNameParseError) as excinfo:
            thread_names.parse("general chat", resource_id=3)

        assert isinstance(excinfo.value, ResourceSkip)
        assert excinfo.value.details == {'name': "general chat", 'resource_id': 3}

    def test_parse_returns_resource(self):
        assert thread_names.parse("ava-day-3").participant == "ava"
