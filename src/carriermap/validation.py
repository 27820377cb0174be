# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Input checks and display helpers used around the classifier.

None of these take part in classification; they share the pattern catalog
and carrier metadata so the UI and the resolver agree on what a tracking
number looks like.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from . import CarrierId
from .carriers import build_tracking_url
from .errors import UnknownCarrierError
from .pattern_catalog import best_format_match

MIN_TRACKING_LENGTH = 8
MAX_TRACKING_LENGTH = 30
MAX_DESCRIPTION_LENGTH = 200

_CARRIER_IDS = frozenset(c.value for c in CarrierId)

_GENERIC_SHAPE_RE = re.compile(r"[A-Z0-9]{8,}")
_ALLOWED_CHARS_RE = re.compile(r"[A-Z0-9\s\-]+", re.IGNORECASE)
_DELIMITERS_RE = re.compile(r"[\s\-_.,;:|\\/]+")
_NON_WORD_RE = re.compile(r"[^\w]")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, *errors: str) -> ValidationResult:
        return cls(valid=False, errors=errors)


# ---------------------------------------------------------------------------
# Plausibility / normalisation
# ---------------------------------------------------------------------------


def is_plausible_tracking_number(text: str) -> bool:
    """Length 8..30 and either a known format or a generic alphanumeric shape."""
    trimmed = text.strip()
    if not MIN_TRACKING_LENGTH <= len(trimmed) <= MAX_TRACKING_LENGTH:
        return False
    return best_format_match(trimmed) is not None or _GENERIC_SHAPE_RE.fullmatch(trimmed) is not None


def clean_tracking_number(text: str) -> str:
    """Strip delimiters and punctuation, upper-case.  ``"1z-999 aa1"`` -> ``"1Z999AA1"``."""
    if not text:
        return ""
    cleaned = _DELIMITERS_RE.sub("", text.strip())
    cleaned = _NON_WORD_RE.sub("", cleaned)
    return cleaned.upper()


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def _as_carrier(carrier: CarrierId | str) -> CarrierId:
    try:
        return CarrierId.parse(carrier)
    except UnknownCarrierError:
        return CarrierId.OTHER


def format_for_display(text: str, carrier: CarrierId | str) -> str:
    """Carrier-specific cosmetic formatting; unknown carriers pass through."""
    number = text.strip()
    resolved = _as_carrier(carrier)
    if resolved is CarrierId.UPS and number.upper().startswith("1Z"):
        return number.upper()
    if resolved is CarrierId.USPS and len(number) == 20 and " " not in number:
        return " ".join(number[i : i + 4] for i in range(0, 20, 4))
    return number


def tracking_url(carrier: CarrierId | str, tracking_number: str) -> str | None:
    """Public tracking page for the number, or None (OTHER / unknown carrier)."""
    return build_tracking_url(_as_carrier(carrier), tracking_number)


# ---------------------------------------------------------------------------
# Form validation
# ---------------------------------------------------------------------------


def validate_tracking_number(tracking_number: str | None) -> ValidationResult:
    if not tracking_number or not tracking_number.strip():
        return ValidationResult.fail("Tracking number is required")
    trimmed = tracking_number.strip()
    if len(trimmed) < MIN_TRACKING_LENGTH:
        return ValidationResult.fail("Tracking number too short")
    if len(trimmed) > MAX_TRACKING_LENGTH:
        return ValidationResult.fail("Tracking number too long")
    if not _ALLOWED_CHARS_RE.fullmatch(trimmed):
        return ValidationResult.fail("Invalid characters in tracking number")
    return ValidationResult.ok()


def validate_carrier(carrier: CarrierId | str | None) -> ValidationResult:
    """The selection must be an exact lower-case carrier id or a CarrierId member."""
    if carrier is None or (isinstance(carrier, str) and not carrier.strip()):
        return ValidationResult.fail("Carrier is required")
    if carrier not in _CARRIER_IDS:
        return ValidationResult.fail("Invalid carrier selection")
    return ValidationResult.ok()


def validate_description(description: str | None) -> ValidationResult:
    """Descriptions are optional but capped."""
    if description and len(description.strip()) > MAX_DESCRIPTION_LENGTH:
        return ValidationResult.fail(f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)")
    return ValidationResult.ok()


def validate_tracking_item(
    tracking_number: str | None,
    carrier: CarrierId | str | None,
    description: str | None = None,
) -> ValidationResult:
    """Aggregate number, carrier and description checks, in that order."""
    errors: list[str] = []
    for result in (
        validate_tracking_number(tracking_number),
        validate_carrier(carrier),
        validate_description(description),
    ):
        errors.extend(result.errors)
    return ValidationResult(valid=not errors, errors=tuple(errors))
