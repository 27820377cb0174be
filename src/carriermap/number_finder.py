# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Find tracking-number candidates in free page text.

Candidate shapes are deliberately loose (unanchored, any carrier); each
candidate then passes a false-positive filter (dates, phone numbers, ZIP and
state codes, short digit runs) and is classified against the pattern catalog.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from . import CarrierId, ConfidenceLevel
from .pattern_catalog import best_format_match

logger = logging.getLogger(__name__)

# Order matters only for de-duplication: earlier shapes claim a number first.
_CANDIDATE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"1Z[0-9A-Z]{16}"),
    re.compile(r"\b[0-9]{10,}\b"),
    re.compile(r"[A-Z]{2}[0-9]{9}[A-Z]{2}"),
    re.compile(r"[0-9]{4}\s[0-9]{4}\s[0-9]{4}\s[0-9]{4}"),
    re.compile(r"TBA[0-9]{10,12}"),
    re.compile(r"\b[A-Z0-9]{8,20}\b"),
)

_EXCLUDE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}-\d{2}-\d{2}"),  # dates
    re.compile(r"\d{3}-\d{3}-\d{4}"),  # phone numbers
    re.compile(r"\d{5}"),  # ZIP codes
    re.compile(r"[A-Z]{2}\d{2}"),  # state codes
)

_MIN_LENGTH = 8
_MIN_DIGITS_ONLY_LENGTH = 10


@dataclass(frozen=True, slots=True)
class FoundNumber:
    number: str
    carrier: CarrierId
    confidence: ConfidenceLevel


def is_candidate(text: str) -> bool:
    """False-positive filter for a raw candidate token."""
    number = text.strip()
    if len(number) < _MIN_LENGTH:
        return False
    if number.isdigit() and len(number) < _MIN_DIGITS_ONLY_LENGTH:
        return False
    return not any(p.fullmatch(number) for p in _EXCLUDE_RES)


def find_tracking_numbers(text: str) -> list[FoundNumber]:
    """Candidates found in *text*, first occurrence wins, with their best carrier."""
    if not text:
        return []

    # (position, number) so output follows reading order
    seen: dict[str, int] = {}
    for pattern in _CANDIDATE_RES:
        for m in pattern.finditer(text):
            number = m.group(0).strip()
            if number in seen or not is_candidate(number):
                continue
            seen[number] = m.start()

    found: list[FoundNumber] = []
    for number in sorted(seen, key=seen.__getitem__):
        best = best_format_match(number)
        if best is None:
            found.append(FoundNumber(number, CarrierId.OTHER, ConfidenceLevel.LOW))
        else:
            found.append(FoundNumber(number, best.carrier, best.confidence))
    logger.debug("Found %d tracking number candidate(s)", len(found))
    return found
