# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Encoding of tracking metadata in daily thread names.

Canonical form: ``day-{N}-{participant}-{MM-DD-YY}``.
Legacy form (decode only): ``{participant}-day-{N}``.
A completed thread carries the ``archive-`` prefix on the otherwise identical name.

The codec is purely syntactic: day numbers outside the challenge are
decoded as-is and range-checked by the progress store.
"""

from __future__ import annotations

import re
from typing import Optional

from services.exceptions import ThreadNameParseError

from .models import DailyResource

ARCHIVE_PREFIX = "archive-"

_CANONICAL_PATTERN = re.compile(r"^day-(\d+)-([^-]+)-(.+)$")
_LEGACY_PATTERN = re.compile(r"^([^-]+)-day-(\d+)$")


def decode(name: str, resource_id: Optional[int] = None) -> Optional[DailyResource]:
    """Decode a thread name, returning ``None`` when it matches neither encoding."""
    if not name:
        return None

    archived = is_archived_name(name)
    clean_name = name[len(ARCHIVE_PREFIX):] if archived else name

    match = _CANONICAL_PATTERN.match(clean_name)
    if match:
        return DailyResource(
            day=int(match.group(1)),
            participant=match.group(2),
            date_tag=match.group(3),
            archived=archived,
            resource_id=resource_id,
        )

    match = _LEGACY_PATTERN.match(clean_name)
    if match:
        return DailyResource(
            day=int(match.group(2)),
            participant=match.group(1),
            archived=archived,
            legacy=True,
            resource_id=resource_id,
        )

    return None


def parse(name: str, resource_id: Optional[int] = None) -> DailyResource:
    """Like :func:`decode`, raising :class:`ThreadNameParseError` for foreign names."""
    resource = decode(name, resource_id)
    if resource is None:
        raise ThreadNameParseError(
            f"Unrecognised thread name: {name!r}", details={'name': name, 'resource_id': resource_id}
        )
    return resource


def encode(day: int, participant: str, date_tag: str, archived: bool = False) -> str:
    """Build the canonical thread name for a daily entry."""
    name = f"day-{day}-{participant}-{date_tag}"
    return f"{ARCHIVE_PREFIX}{name}" if archived else name


def archived_name(name: str) -> str:
    """Return *name* with the archive prefix, adding it at most once."""
    return name if is_archived_name(name) else f"{ARCHIVE_PREFIX}{name}"


def is_archived_name(name: str) -> bool:
    return bool(name) and name.startswith(ARCHIVE_PREFIX)
