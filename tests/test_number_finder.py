# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for carriermap.number_finder."""

from __future__ import annotations

import pytest

from carriermap import CarrierId, ConfidenceLevel
from carriermap.number_finder import FoundNumber, find_tracking_numbers, is_candidate

ORDER_EMAIL = """\
Your UPS package 1Z999AA10123456784 ships with order TBA123456789012 on 2024-01-15.
Questions? Call 555-123-4567.
"""


class TestIsCandidate:
    @pytest.mark.parametrize("token", ["1Z999AA10123456784", "ABCDEFGH1", "1234567890"])
    def test_accepted(self, token):
        assert is_candidate(token)

    @pytest.mark.parametrize(
        "token",
        [
            "1234567",  # too short
            "123456789",  # digits only, under 10
            "2024-01-15",
            "555-123-4567",
        ],
    )
    def test_rejected(self, token):
        assert not is_candidate(token)


class TestFindTrackingNumbers:
    def test_order_email(self):
        assert find_tracking_numbers(ORDER_EMAIL) == [
            FoundNumber("1Z999AA10123456784", CarrierId.UPS, ConfidenceLevel.HIGH),
            FoundNumber("TBA123456789012", CarrierId.AMAZON, ConfidenceLevel.HIGH),
        ]

    def test_reading_order(self):
        found = find_tracking_numbers("first 123456789012 then 1Z999AA10123456784")
        assert [f.number for f in found] == ["123456789012", "1Z999AA10123456784"]
        assert found[0].carrier is CarrierId.FEDEX

    def test_duplicates_reported_once(self):
        found = find_tracking_numbers("EA123456789US ... again EA123456789US")
        assert found == [FoundNumber("EA123456789US", CarrierId.USPS, ConfidenceLevel.HIGH)]

    def test_space_grouped_usps(self):
        found = find_tracking_numbers("USPS tracking: 9400 1000 0000 0000")
        assert found == [FoundNumber("9400 1000 0000 0000", CarrierId.USPS, ConfidenceLevel.HIGH)]

    def test_unrecognised_shape_is_other_low(self):
        found = find_tracking_numbers("Reference ABCD1234EFGH")
        assert found == [FoundNumber("ABCD1234EFGH", CarrierId.OTHER, ConfidenceLevel.LOW)]

    @pytest.mark.parametrize("text", ["", "Nothing to see here.", "Order 123456789 on 2024-01-15"])
    def test_nothing_found(self, text):
        assert find_tracking_numbers(text) == []
