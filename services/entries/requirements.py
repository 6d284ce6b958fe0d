# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Submission completion state machine.

A daily entry holds one requirement record per configured requirement.
Replies are checked against the record's content kind; once every record
is complete the entry asks to be archived, exactly once.  Nothing here
talks to Discord: :mod:`services.entries.entry_service` maps messages and
embeds onto these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from services.exceptions import SubmissionRejectedError

STRIKE = "~~"


class RequirementKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    BOTH = "both"
    EITHER = "either"

    @property
    def requirement_text(self) -> str:
        return _REQUIREMENT_TEXTS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "RequirementKind":
        """Kind named by *value* (``text``, ``image``, ...); ``either`` when unknown."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.EITHER

    @classmethod
    def from_field_value(cls, value: str) -> "RequirementKind":
        """Read the kind back from the requirement text shown in an entry embed."""
        for kind, marker in _FIELD_MARKERS:
            if marker in value:
                return kind
        return cls.EITHER


_REQUIREMENT_TEXTS = {
    RequirementKind.TEXT: "Requires text only.",
    RequirementKind.IMAGE: "Requires image only.",
    RequirementKind.BOTH: "Requires both text and image.",
    RequirementKind.EITHER: "Requires image or text.",
}

_FIELD_MARKERS = (
    (RequirementKind.TEXT, "text only"),
    (RequirementKind.IMAGE, "image only"),
    (RequirementKind.BOTH, "both text and image"),
    (RequirementKind.EITHER, "image or text"),
)


@dataclass(frozen=True)
class Submission:
    """Content of one reply: its text and the content types of its attachments."""

    text: str = ""
    attachment_types: Sequence[str] = ()

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def has_media(self) -> bool:
        return len(self.attachment_types) > 0

    @property
    def has_image(self) -> bool:
        return any((content_type or "").startswith("image/") for content_type in self.attachment_types)


def satisfies(kind: RequirementKind, submission: Submission) -> bool:
    if kind is RequirementKind.TEXT:
        return submission.has_text and not submission.has_media
    if kind is RequirementKind.IMAGE:
        return submission.has_image and not submission.has_text
    if kind is RequirementKind.BOTH:
        return submission.has_text and submission.has_image
    return submission.has_text or submission.has_image


def require_satisfied(kind: RequirementKind, submission: Submission) -> None:
    if not satisfies(kind, submission):
        raise SubmissionRejectedError(
            "Invalid entry format. Please check the requirements.",
            details={
                'kind': kind.value,
                'has_text': submission.has_text,
                'has_image': submission.has_image,
            },
        )


def strike(title: str) -> str:
    return title if is_struck(title) else f"{STRIKE}{title}{STRIKE}"


def is_struck(title: Optional[str]) -> bool:
    return bool(title) and title.startswith(STRIKE)


@dataclass
class RequirementRecord:
    record_id: int
    title: str
    kind: RequirementKind = RequirementKind.EITHER
    complete: bool = False

    def mark_complete(self) -> bool:
        """Mark the record complete; returns ``False`` when it already was."""
        if self.complete:
            return False
        self.complete = True
        return True

    @property
    def display_title(self) -> str:
        return strike(self.title) if self.complete else self.title


class EntryState(str, Enum):
    OPEN = "open"
    COMPLETE = "complete"
    ARCHIVED = "archived"


class SubmissionOutcome(str, Enum):
    IGNORED = "ignored"
    REJECTED = "rejected"
    ALREADY_COMPLETE = "already_complete"
    ACCEPTED = "accepted"
    ENTRY_COMPLETE = "entry_complete"


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    record: Optional[RequirementRecord] = None
    reason: str = ""

    @property
    def archive_required(self) -> bool:
        return self.outcome is SubmissionOutcome.ENTRY_COMPLETE


@dataclass
class DailyEntry:
    """One participant's thread for one day and its requirement records.

    An entry without records stays open: there is nothing to satisfy.
    """

    name: str
    requirements: List[RequirementRecord] = field(default_factory=list)
    archived: bool = False

    @property
    def state(self) -> EntryState:
        if self.archived:
            return EntryState.ARCHIVED
        if self.requirements and all(record.complete for record in self.requirements):
            return EntryState.COMPLETE
        return EntryState.OPEN

    def find(self, record_id: int) -> Optional[RequirementRecord]:
        for record in self.requirements:
            if record.record_id == record_id:
                return record
        return None

    def evaluate(self) -> bool:
        """Move a complete entry to archived; ``True`` only on that transition."""
        if self.state is EntryState.COMPLETE:
            self.archived = True
            return True
        return False

    def submit(self, record_id: int, submission: Submission) -> SubmissionResult:
        if self.archived:
            return SubmissionResult(SubmissionOutcome.IGNORED, reason="entry is archived")

        record = self.find(record_id)
        if record is None:
            return SubmissionResult(SubmissionOutcome.IGNORED, reason="not a requirement")
        if record.complete:
            return SubmissionResult(SubmissionOutcome.ALREADY_COMPLETE, record)

        try:
            require_satisfied(record.kind, submission)
        except SubmissionRejectedError as e:
            return SubmissionResult(SubmissionOutcome.REJECTED, record, reason=e.message)

        record.mark_complete()
        if self.evaluate():
            return SubmissionResult(SubmissionOutcome.ENTRY_COMPLETE, record)
        return SubmissionResult(SubmissionOutcome.ACCEPTED, record)
