# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Evidence fusion: one Classification from up to three sources.

Two phases:
  1. Context-free – the tracking number's format (pattern catalog).  Only a
     HIGH-confidence format match is admitted as a candidate.
  2. Context      – the page URL's domain (always admitted at HIGH) and the
     page content scan (admitted at its own confidence).

Candidates are ranked by ``source priority + confidence rank``
(PATTERN 3, WEBSITE 2, CONTENT_LOGO 2, CONTENT_TEXT 1; HIGH 3, MEDIUM 2,
LOW 1).  Ties go to the higher source priority, then to admission order.
With no candidates the answer is OTHER / LOW / no source.

Everything here is synchronous and stateless; identical inputs always give
identical output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from . import (
    UNCLASSIFIED,
    Classification,
    ConfidenceLevel,
    Evidence,
    EvidenceSource,
    PageContext,
)
from .content_scanner import scan_content
from .domain_map import lookup_by_host
from .pattern_catalog import best_format_match

logger = logging.getLogger(__name__)


def collect_evidence(tracking_number: str, page_context: PageContext | None = None) -> list[Evidence]:
    """Admitted candidates in admission order (pattern, website, content)."""
    admitted: list[Evidence] = []

    pattern = best_format_match(tracking_number)
    if pattern is not None and pattern.confidence == ConfidenceLevel.HIGH:
        admitted.append(pattern)

    if page_context is None:
        return admitted

    if page_context.url:
        carrier = lookup_by_host(page_context.url)
        if carrier is not None:
            admitted.append(Evidence(carrier=carrier, confidence=ConfidenceLevel.HIGH, source=EvidenceSource.WEBSITE))

    if page_context.has_content:
        content = scan_content(page_context.text, page_context.images)
        if content is not None:
            admitted.append(content)

    return admitted


def fuse(evidence: Sequence[Evidence]) -> Classification:
    """Reduce admitted candidates to the single best Classification."""
    if not evidence:
        return UNCLASSIFIED
    # max() keeps the first of equal keys, which gives admission-order ties
    best = max(evidence, key=lambda ev: (ev.score, ev.source.priority))
    return Classification.from_evidence(best)


def classify(tracking_number: str, page_context: PageContext | None = None) -> Classification:
    """Classify *tracking_number*, corroborated by *page_context* when given."""
    evidence = collect_evidence(tracking_number, page_context)
    result = fuse(evidence)
    logger.debug(
        "classify %r: %d candidate(s) -> %s/%s via %s",
        tracking_number.strip(),
        len(evidence),
        result.carrier.value,
        result.confidence.name,
        result.source.value if result.source else "none",
    )
    return result
