# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Pydantic models for the JSON boundary.

Page context arriving from another process (a browser extension, a saved
capture) is validated here before it reaches the engine; classifications
leave through ClassificationOut.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from . import Classification, ImageRef, PageContext
from .errors import PageContextFormatError
from .validation import tracking_url

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class ImageIn(BaseModel):
    """One <img> descriptor as captured in the page."""

    src: str = Field("", description="Image source URL")
    alt: str = Field("", description="alt attribute")
    title: str = Field("", description="title attribute")


class PageContextIn(BaseModel):
    """Extracted page content; every field optional."""

    url: str | None = Field(None, description="Fully qualified URL of the page")
    text: str | None = Field(None, description="Visible page text")
    images: list[ImageIn] = Field(default_factory=list, description="Image descriptors")

    def to_context(self) -> PageContext:
        return PageContext(
            url=self.url or None,
            text=self.text or None,
            images=tuple(ImageRef(src=i.src, alt=i.alt, title=i.title) for i in self.images),
        )


def load_page_context(raw: str | bytes) -> PageContext:
    """Parse and validate page-context JSON.

    Raises:
        PageContextFormatError: not JSON, or JSON of the wrong shape.
    """
    try:
        return PageContextIn.model_validate_json(raw).to_context()
    except ValidationError as exc:
        first = exc.errors()[0]["msg"] if exc.error_count() else "unknown error"
        raise PageContextFormatError(f"Invalid page context ({exc.error_count()} error(s)): {first}") from exc


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class ClassificationOut(BaseModel):
    """Serialisable classification plus the carrier's tracking page."""

    tracking_number: str = Field(..., description="Trimmed input number")
    carrier: str = Field(..., description="Carrier id (ups, fedex, ..., other)")
    confidence: str = Field(..., description="high | medium | low")
    source: str | None = Field(None, description="Winning evidence source, None when unclassified")
    tracking_url: str | None = Field(None, description="Carrier tracking page for the number")

    @classmethod
    def from_classification(cls, classification: Classification, tracking_number: str) -> ClassificationOut:
        number = tracking_number.strip()
        return cls(
            tracking_number=number,
            carrier=classification.carrier.value,
            confidence=classification.confidence.name.lower(),
            source=classification.source.value if classification.source else None,
            tracking_url=tracking_url(classification.carrier, number) if number else None,
        )
