# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Cheat-day ledger stored as ``name: N`` lines in a reference message."""

import re
from typing import Any, Dict, Iterable, Mapping, Optional

from utils.logging_utils import get_module_logger

logger = get_module_logger('cheat.ledger')

_LINE_PATTERN = re.compile(r"^([^:]+):\s*(\d+)$")


def parse_ledger(content: str) -> Dict[str, int]:
    """Read ``name: N`` lines; anything else is skipped."""
    ledger: Dict[str, int] = {}
    for line in (content or "").splitlines():
        match = _LINE_PATTERN.match(line.strip())
        if not match:
            if line.strip():
                logger.debug("Skipping unparsable ledger line: %r", line)
            continue
        ledger[match.group(1).strip()] = int(match.group(2))
    return ledger


def serialize_ledger(ledger: Mapping[str, int]) -> str:
    names = sorted(ledger, key=lambda name: (name.casefold(), name))
    return "\n".join(f"{name}: {ledger[name]}" for name in names)


def find_ledger_message(messages: Iterable[Any]) -> Optional[Any]:
    """First bot message whose content parses as a non-empty ledger."""
    for message in messages:
        if not getattr(message.author, 'bot', False) or ":" not in (message.content or ""):
            continue
        if parse_ledger(message.content):
            return message
    return None


def cheat_note(date_tag: str) -> str:
    return f"## CHEAT DAY WAS USED - {date_tag}"
