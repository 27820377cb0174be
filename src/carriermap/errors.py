# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""carriermap exception hierarchy.

All carriermap-specific errors inherit from CarrierMapError, allowing callers
to catch the base class for any failure or specific subclasses for targeted
handling.  The classification engine itself never raises these for valid
input; they surface at the edges (carrier parsing, page-context I/O).
"""

from __future__ import annotations


class CarrierMapError(Exception):
    """Base exception for all carriermap errors."""


class UnknownCarrierError(CarrierMapError, ValueError):
    """A carrier id string does not name a known carrier."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown carrier: {value!r}")
        self.value = value


class ExtractionError(CarrierMapError):
    """Page-context retrieval (browser launch, navigation, script) failed."""


class PageContextFormatError(CarrierMapError, ValueError):
    """Externally supplied page-context JSON is malformed."""
