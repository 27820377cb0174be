# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for carriermap.content_scanner."""

from __future__ import annotations

import pytest

from carriermap import CarrierId, ConfidenceLevel, EvidenceSource, ImageRef
from carriermap.content_scanner import CARRIER_KEYWORDS, scan_content

# ── Text layer ───────────────────────────────────────────────────────


class TestTextScan:
    def test_keyword_in_text(self):
        ev = scan_content("Your order shipped via FedEx Ground", None)
        assert ev is not None
        assert (ev.carrier, ev.confidence, ev.source) == (
            CarrierId.FEDEX,
            ConfidenceLevel.MEDIUM,
            EvidenceSource.CONTENT_TEXT,
        )

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Delivered by the United States Postal Service", CarrierId.USPS),
            ("Handled by Amazon Logistics", CarrierId.AMAZON),
            ("Laser Ship will deliver tomorrow", CarrierId.LASERSHIP),
            ("Federal Express overnight", CarrierId.FEDEX),
        ],
    )
    def test_name_variants(self, text, expected):
        ev = scan_content(text, [])
        assert ev is not None
        assert ev.carrier is expected

    def test_table_order_breaks_text_ties(self):
        ev = scan_content("dhl or fedex, whichever is cheaper", None)
        assert ev is not None
        assert ev.carrier is CarrierId.FEDEX

    def test_no_keyword(self):
        assert scan_content("Your order has shipped", None) is None


# ── Logo layer ───────────────────────────────────────────────────────


class TestLogoScan:
    def test_same_carrier_in_text_and_logo(self):
        ev = scan_content("your dhl parcel", [ImageRef(alt="dhl")])
        assert ev is not None
        assert (ev.carrier, ev.confidence, ev.source) == (
            CarrierId.DHL,
            ConfidenceLevel.HIGH,
            EvidenceSource.CONTENT_LOGO,
        )

    def test_logo_beats_text(self):
        ev = scan_content("shipped with fedex", [ImageRef(src="/img/dhl-logo.png")])
        assert ev is not None
        assert (ev.carrier, ev.confidence, ev.source) == (
            CarrierId.DHL,
            ConfidenceLevel.HIGH,
            EvidenceSource.CONTENT_LOGO,
        )

    @pytest.mark.parametrize(
        "image",
        [
            ImageRef(src="https://cdn.example.com/OnTrac.svg"),
            ImageRef(alt="OnTrac logo"),
            ImageRef(title="Shipped with OnTrac"),
        ],
    )
    def test_any_attribute_counts(self, image):
        ev = scan_content(None, [image])
        assert ev is not None
        assert ev.carrier is CarrierId.ONTRAC
        assert ev.source is EvidenceSource.CONTENT_LOGO

    def test_table_order_breaks_logo_ties(self):
        images = [ImageRef(src="/fedex-logo.png"), ImageRef(alt="UPS")]
        ev = scan_content(None, images)
        assert ev is not None
        assert ev.carrier is CarrierId.UPS

    def test_accepts_any_iterable(self):
        ev = scan_content(None, (img for img in [ImageRef(alt="USPS")]))
        assert ev is not None
        assert ev.carrier is CarrierId.USPS


# ── Empty input ──────────────────────────────────────────────────────


class TestEmptyInput:
    @pytest.mark.parametrize("text,images", [(None, None), ("", []), ("", None), (None, [])])
    def test_nothing_to_scan(self, text, images):
        assert scan_content(text, images) is None

    def test_images_without_keywords(self):
        assert scan_content(None, [ImageRef(src="/banner.png", alt="Sale")]) is None

    def test_keyword_table_covers_every_named_carrier(self):
        assert set(CARRIER_KEYWORDS) == set(CarrierId) - {CarrierId.OTHER}
