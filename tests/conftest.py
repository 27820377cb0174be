# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import carriermap  # noqa: F401
except ImportError:
    raise ImportError("carriermap is not installed. Run: pip install -e '.[dev]'") from None

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture(autouse=True)
def _block_real_browser(request, monkeypatch):
    """Safety net: prevent real Chromium launches in unit tests.

    Tests that exercise ``fetch_page_context`` should patch
    ``carriermap.page_extractor.async_playwright`` themselves; that patch
    takes priority over this fixture.  Opt out with::

        @pytest.mark.allow_real_browser
    """
    if "allow_real_browser" in request.keywords:
        return

    def _no_real_playwright():
        raise RuntimeError(
            "Test tried to launch a real browser. Patch 'carriermap.page_extractor.async_playwright' in your test."
        )

    monkeypatch.setattr("carriermap.page_extractor.async_playwright", _no_real_playwright)


@pytest.fixture
def make_page():
    """Factory for a mock Playwright page whose evaluate() returns *payload*."""

    def _make(payload=None, *, url: str = "https://shop.example.com/orders/1", side_effect=None) -> MagicMock:
        page = MagicMock()
        page.url = url
        page.evaluate = AsyncMock(return_value=payload, side_effect=side_effect)
        return page

    return _make
