# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Keyword/logo scan over already-extracted page content.

Two layers, both plain substring checks on lower-cased strings:
  1. Text  – carrier name variants in the page body  -> CONTENT_TEXT, MEDIUM
  2. Logo  – the same variants in an <img> src/alt/title -> CONTENT_LOGO, HIGH

Logo references are the stronger signal.  Extraction itself happens
elsewhere (see page_extractor); this module never touches a browser.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType

from . import CarrierId, ConfidenceLevel, Evidence, EvidenceSource, ImageRef

logger = logging.getLogger(__name__)

_KEYWORDS: dict[CarrierId, tuple[str, ...]] = {
    CarrierId.UPS: ("ups", "united parcel service"),
    CarrierId.FEDEX: ("fedex", "federal express"),
    CarrierId.USPS: ("usps", "united states postal service", "postal service"),
    CarrierId.DHL: ("dhl",),
    CarrierId.AMAZON: ("amazon", "amazon logistics"),
    CarrierId.ONTRAC: ("ontrac",),
    CarrierId.LASERSHIP: ("lasership", "laser ship"),
}

CARRIER_KEYWORDS: MappingProxyType[CarrierId, tuple[str, ...]] = MappingProxyType(_KEYWORDS)


def _text_hits(page_text: str) -> list[Evidence]:
    text = page_text.lower()
    return [
        Evidence(carrier=carrier, confidence=ConfidenceLevel.MEDIUM, source=EvidenceSource.CONTENT_TEXT)
        for carrier, keywords in CARRIER_KEYWORDS.items()
        for kw in keywords
        if kw in text
    ]


def _logo_hits(images: list[ImageRef]) -> list[Evidence]:
    haystacks = [((img.src or "").lower(), (img.alt or "").lower(), (img.title or "").lower()) for img in images]
    hits: list[Evidence] = []
    for carrier, keywords in CARRIER_KEYWORDS.items():
        for kw in keywords:
            if any(kw in field for fields in haystacks for field in fields):
                hits.append(
                    Evidence(carrier=carrier, confidence=ConfidenceLevel.HIGH, source=EvidenceSource.CONTENT_LOGO)
                )
    return hits


def scan_content(page_text: str | None, images: Iterable[ImageRef] | None) -> Evidence | None:
    """Best content evidence, or None when no keyword appears anywhere.

    Highest confidence wins; among equals the first hit in keyword-table
    order wins.  Missing text or images simply contribute nothing.
    """
    candidates: list[Evidence] = []
    if page_text:
        candidates.extend(_text_hits(page_text))
    image_list = list(images) if images else []
    if image_list:
        candidates.extend(_logo_hits(image_list))

    best: Evidence | None = None
    for ev in candidates:
        if best is None or ev.confidence > best.confidence:
            best = ev
    if best is not None:
        logger.debug("Content scan: %d hit(s), best=%s/%s", len(candidates), best.carrier.value, best.source.value)
    return best
