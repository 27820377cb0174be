# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""carriermap: multi-source shipping-carrier classification.

Identifies which carrier handles a parcel from three imperfect sources:
- the lexical shape of the tracking number (pattern catalog)
- the domain of the page the user is viewing (domain map)
- scanned page content: body text and image metadata (content scanner)

The resolver fuses whatever evidence is available into one Classification.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .errors import UnknownCarrierError


class CarrierId(str, enum.Enum):
    """Closed set of carriers.  OTHER is the no-confident-match sentinel."""

    UPS = "ups"
    FEDEX = "fedex"
    USPS = "usps"
    DHL = "dhl"
    AMAZON = "amazon"
    ONTRAC = "ontrac"
    LASERSHIP = "lasership"
    OTHER = "other"

    @classmethod
    def parse(cls, value: CarrierId | str) -> CarrierId:
        """Return the member for *value* (member or case-insensitive id).

        Raises:
            UnknownCarrierError: value does not name a carrier.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownCarrierError(value)


class ConfidenceLevel(enum.IntEnum):
    """Total order used for every ranking decision; the value is the rank."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


_SOURCE_PRIORITY: dict[str, int] = {
    "pattern": 3,
    "website": 2,
    "content_logo": 2,
    "content_text": 1,
}


class EvidenceSource(str, enum.Enum):
    """Where a piece of evidence came from."""

    PATTERN = "pattern"
    WEBSITE = "website"
    CONTENT_TEXT = "content_text"
    CONTENT_LOGO = "content_logo"

    @property
    def priority(self) -> int:
        return _SOURCE_PRIORITY[self.value]


@dataclass(frozen=True, slots=True)
class Evidence:
    """One candidate carrier attribution produced by a single source."""

    carrier: CarrierId
    confidence: ConfidenceLevel
    source: EvidenceSource

    @property
    def score(self) -> int:
        """Composite fusion score: source priority + confidence rank."""
        return self.source.priority + int(self.confidence)


@dataclass(frozen=True, slots=True)
class Classification:
    """The resolver's single answer.  ``source`` is None when nothing matched."""

    carrier: CarrierId
    confidence: ConfidenceLevel
    source: EvidenceSource | None

    @classmethod
    def from_evidence(cls, evidence: Evidence) -> Classification:
        return cls(carrier=evidence.carrier, confidence=evidence.confidence, source=evidence.source)


UNCLASSIFIED = Classification(carrier=CarrierId.OTHER, confidence=ConfidenceLevel.LOW, source=None)


@dataclass(frozen=True, slots=True)
class ImageRef:
    """Attributes of one <img> on the scanned page."""

    src: str = ""
    alt: str = ""
    title: str = ""


@dataclass(frozen=True, slots=True)
class PageContext:
    """Already-extracted content of the page the user is viewing.

    Every field is optional; an empty context contributes no evidence.
    """

    url: str | None = None
    text: str | None = None
    images: tuple[ImageRef, ...] = field(default_factory=tuple)

    @property
    def has_content(self) -> bool:
        return bool(self.text) or bool(self.images)
