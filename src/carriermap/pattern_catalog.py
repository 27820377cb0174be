# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Per-carrier tracking-number format grammars.

Each carrier owns an ordered tuple of FormatRule entries.  Rules are
evaluated independently: a string may match several rules of several
carriers at once, and that ambiguity is resolved by the resolver, not here.

The table is built once at import time and never mutated.  Table order
(UPS, FedEx, USPS, DHL, Amazon, OnTrac, LaserShip) is the tie-break order
whenever two matches share a confidence level.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType

from . import CarrierId, ConfidenceLevel, Evidence, EvidenceSource

logger = logging.getLogger(__name__)

HIGH = ConfidenceLevel.HIGH
MEDIUM = ConfidenceLevel.MEDIUM
LOW = ConfidenceLevel.LOW

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormatRule:
    """A full-match pattern over the tracking-number string plus its confidence."""

    pattern: re.Pattern[str]
    confidence: ConfidenceLevel

    def matches(self, candidate: str) -> bool:
        return self.pattern.fullmatch(candidate) is not None


def _rule(pattern: str, confidence: ConfidenceLevel) -> FormatRule:
    return FormatRule(re.compile(pattern), confidence)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

_RULES: dict[CarrierId, tuple[FormatRule, ...]] = {
    CarrierId.UPS: (
        _rule(r"1Z[0-9A-Z]{16}", HIGH),
        _rule(r"T[0-9]{10}", HIGH),  # UPS Ground / Mail Innovations
        _rule(r"[0-9]{10,}", MEDIUM),
    ),
    CarrierId.FEDEX: (
        _rule(r"[0-9]{12}", HIGH),
        _rule(r"[0-9]{14}", HIGH),
        _rule(r"[0-9]{15}", HIGH),
        _rule(r"[0-9]{20}", HIGH),
    ),
    CarrierId.USPS: (
        _rule(r"[A-Z]{2}[0-9]{9}[A-Z]{2}", HIGH),  # UPU S10 international
        _rule(r"[0-9]{4} [0-9]{4} [0-9]{4} [0-9]{4}", HIGH),
        _rule(r"[A-Z]{2}[0-9]{9}US", HIGH),
        _rule(r"[0-9]{20,22}", MEDIUM),  # IMpb
        _rule(r"[0-9]{26}", MEDIUM),
    ),
    CarrierId.DHL: (
        _rule(r"[0-9]{10,11}", MEDIUM),
        _rule(r"[0-9]{12}", MEDIUM),
        _rule(r"[0-9]{14}", MEDIUM),
        _rule(r"[0-9]{16}", MEDIUM),
    ),
    CarrierId.AMAZON: (
        _rule(r"TBA[0-9]{10}", HIGH),
        _rule(r"TBA[0-9]{12}", HIGH),
        _rule(r"[0-9]{3}-[0-9]{7}-[0-9]{7}", HIGH),  # order id
    ),
    CarrierId.ONTRAC: (
        _rule(r"C[0-9]{14}", HIGH),
        _rule(r"[A-Z]{2}[0-9]{8}", MEDIUM),
        _rule(r"[0-9]{12}", LOW),
    ),
    CarrierId.LASERSHIP: (
        _rule(r"1LS[0-9A-Z]{10,16}", HIGH),
        _rule(r"L[A-Z][0-9]{8}", HIGH),
        _rule(r"[A-Z]{2}[0-9]{8}", MEDIUM),
        _rule(r"[0-9]{12}", LOW),
    ),
}

CATALOG: MappingProxyType[CarrierId, tuple[FormatRule, ...]] = MappingProxyType(_RULES)


def catalog_rules() -> MappingProxyType[CarrierId, tuple[FormatRule, ...]]:
    """Read-only view of the rule table, in tie-break order."""
    return CATALOG


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def lookup_format_matches(candidate: str) -> list[Evidence]:
    """Return one PATTERN evidence per matching rule, in table order.

    The input is trimmed first.  Unmatched input yields an empty list.
    """
    number = candidate.strip()
    if not number:
        return []
    matches = [
        Evidence(carrier=carrier, confidence=rule.confidence, source=EvidenceSource.PATTERN)
        for carrier, rules in CATALOG.items()
        for rule in rules
        if rule.matches(number)
    ]
    logger.debug("Format lookup %r: %d rule(s) matched", number, len(matches))
    return matches


def best_format_match(candidate: str) -> Evidence | None:
    """Highest-confidence match; the first in table order wins a tie."""
    best: Evidence | None = None
    for ev in lookup_format_matches(candidate):
        if best is None or ev.confidence > best.confidence:
            best = ev
    return best
