# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for carriermap.schemas: page-context input and classification output."""

from __future__ import annotations

import json

import pytest

from carriermap import UNCLASSIFIED, CarrierId, Classification, ConfidenceLevel, EvidenceSource, ImageRef, PageContext
from carriermap.errors import CarrierMapError, PageContextFormatError
from carriermap.schemas import ClassificationOut, load_page_context


class TestLoadPageContext:
    def test_full_payload(self):
        raw = json.dumps(
            {
                "url": "https://www.ups.com/track",
                "text": "hello",
                "images": [{"src": "/logo.png", "alt": "UPS"}, {}],
            }
        )
        assert load_page_context(raw) == PageContext(
            url="https://www.ups.com/track",
            text="hello",
            images=(ImageRef(src="/logo.png", alt="UPS"), ImageRef()),
        )

    def test_bytes_input(self):
        assert load_page_context(b'{"text": "fedex"}') == PageContext(text="fedex")

    @pytest.mark.parametrize("raw", ["{}", '{"url": "", "text": null, "images": []}'])
    def test_empty_context(self, raw):
        assert load_page_context(raw) == PageContext()

    @pytest.mark.parametrize("raw", ["not json", '{"images": "x"}', '{"images": [{"alt": 3}]}', "[]"])
    def test_malformed(self, raw):
        with pytest.raises(PageContextFormatError, match=r"Invalid page context \(\d+ error\(s\)\)"):
            load_page_context(raw)

    def test_format_error_hierarchy(self):
        assert issubclass(PageContextFormatError, CarrierMapError)
        assert issubclass(PageContextFormatError, ValueError)


class TestClassificationOut:
    def test_classified(self):
        result = Classification(CarrierId.UPS, ConfidenceLevel.HIGH, EvidenceSource.PATTERN)
        out = ClassificationOut.from_classification(result, " 1Z999AA10123456784 ")
        assert out.model_dump() == {
            "tracking_number": "1Z999AA10123456784",
            "carrier": "ups",
            "confidence": "high",
            "source": "pattern",
            "tracking_url": "https://www.ups.com/track?trackingNumber=1Z999AA10123456784",
        }

    def test_unclassified(self):
        out = ClassificationOut.from_classification(UNCLASSIFIED, "hello")
        assert out.carrier == "other"
        assert out.confidence == "low"
        assert out.source is None
        assert out.tracking_url is None

    def test_json_round_trip(self):
        result = Classification(CarrierId.DHL, ConfidenceLevel.MEDIUM, EvidenceSource.CONTENT_TEXT)
        out = ClassificationOut.from_classification(result, "1234567890")
        assert json.loads(out.model_dump_json())["source"] == "content_text"
