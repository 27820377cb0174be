# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Best-effort page-context extraction.

Three entry points, all producing a PageContext for the resolver:
  - context_from_html()     offline, lxml over a saved HTML document
  - extract_page_context()  one script evaluation in an open Playwright page
  - fetch_page_context()    launch headless Chromium, navigate once, extract

Retrieval is the only suspension point in a classification request.  It runs
once, is bounded by a timeout, and any failure degrades to "no page context"
(None) instead of aborting classification.  There is no retry.
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import suppress
from dataclasses import dataclass

import lxml.html
from lxml import etree
from playwright.async_api import Page, async_playwright

from . import Classification, ImageRef, PageContext
from .errors import ExtractionError
from .resolver import classify

logger = logging.getLogger(__name__)

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")

# Runs inside the browsed page; returns plain JSON-serialisable data only.
_EXTRACT_JS = """(maxImages) => {
  const body = document.body;
  const text = body ? (body.innerText || '') : '';
  const images = Array.from(document.images).slice(0, maxImages).map(img => ({
    src: img.currentSrc || img.src || '',
    alt: img.alt || '',
    title: img.title || '',
  }));
  return { text, images };
}"""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if raw:
        with suppress(ValueError):
            return float(raw)
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if raw:
        with suppress(ValueError):
            return int(raw)
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in ("1", "true", "yes"):
        return True
    if raw in ("0", "false", "no"):
        return False
    return default


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """Limits for a single page-context retrieval."""

    timeout_s: float = 10.0  # whole extraction budget (script evaluation)
    navigation_timeout_ms: int = 30000
    headless: bool = True
    max_text_chars: int = 200_000
    max_images: int = 500

    @classmethod
    def from_env(cls) -> ExtractionConfig:
        """Defaults overridden by CARRIERMAP_* env vars; bad values are ignored."""
        base = cls()
        return cls(
            timeout_s=_env_float("CARRIERMAP_EXTRACT_TIMEOUT", base.timeout_s),
            navigation_timeout_ms=_env_int("CARRIERMAP_NAV_TIMEOUT_MS", base.navigation_timeout_ms),
            headless=_env_bool("CARRIERMAP_HEADLESS", base.headless),
            max_text_chars=_env_int("CARRIERMAP_MAX_TEXT_CHARS", base.max_text_chars),
            max_images=_env_int("CARRIERMAP_MAX_IMAGES", base.max_images),
        )


# ---------------------------------------------------------------------------
# Offline (lxml)
# ---------------------------------------------------------------------------


def context_from_html(html: str, url: str | None = None, config: ExtractionConfig | None = None) -> PageContext:
    """Extract lower-cased visible text and <img> attributes from raw HTML."""
    cfg = config or ExtractionConfig()
    if not html or not html.strip():
        return PageContext(url=url)
    try:
        doc = lxml.html.document_fromstring(html)
    except (etree.ParserError, ValueError):
        logger.warning("Could not parse HTML for %s", url or "<offline>")
        return PageContext(url=url)

    images = tuple(
        ImageRef(
            src=img.get("src") or "",
            alt=img.get("alt") or "",
            title=img.get("title") or "",
        )
        for img in doc.iter("img")
    )[: cfg.max_images]

    for el in list(doc.iter(*_NON_CONTENT_TAGS)):
        el.drop_tree()
    # body only, one separator per text node, like innerText
    body = doc.find("body")
    raw = " ".join(body.itertext()) if body is not None else ""
    text = " ".join(raw.split()).lower()

    return PageContext(url=url, text=text[: cfg.max_text_chars] or None, images=images)


# ---------------------------------------------------------------------------
# Live (Playwright)
# ---------------------------------------------------------------------------


def _context_from_payload(payload: object, url: str | None, cfg: ExtractionConfig) -> PageContext:
    if not isinstance(payload, dict):
        raise ExtractionError(f"Unexpected extraction payload: {type(payload).__name__}")
    text = str(payload.get("text") or "").lower()[: cfg.max_text_chars]
    images = tuple(
        ImageRef(
            src=str(item.get("src") or ""),
            alt=str(item.get("alt") or ""),
            title=str(item.get("title") or ""),
        )
        for item in (payload.get("images") or [])[: cfg.max_images]
        if isinstance(item, dict)
    )
    return PageContext(url=url, text=text or None, images=images)


async def extract_page_context(page: Page, config: ExtractionConfig | None = None) -> PageContext | None:
    """Read text and images from an open page.  Returns None on any failure.

    Cancellation of the calling task propagates; everything else degrades.
    """
    cfg = config or ExtractionConfig()
    url = page.url or None
    try:
        payload = await asyncio.wait_for(page.evaluate(_EXTRACT_JS, cfg.max_images), timeout=cfg.timeout_s)
        return _context_from_payload(payload, url, cfg)
    except TimeoutError:
        logger.info("Page-context extraction timed out after %.1fs (%s)", cfg.timeout_s, url)
        return None
    except Exception as exc:
        logger.warning("Page-context extraction failed for %s: %s", url, exc)
        return None


async def _fetch(url: str, cfg: ExtractionConfig) -> PageContext:
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=cfg.headless)
        try:
            page = await browser.new_page()
            try:
                await page.goto(url, wait_until="load", timeout=cfg.navigation_timeout_ms)
            except Exception as exc:
                raise ExtractionError(f"Navigation to {url} failed: {exc}") from exc
            payload = await asyncio.wait_for(page.evaluate(_EXTRACT_JS, cfg.max_images), timeout=cfg.timeout_s)
            # page.url is the post-redirect URL; its host is the one that served the content
            return _context_from_payload(payload, page.url or url, cfg)
        finally:
            await browser.close()


async def fetch_page_context(url: str, config: ExtractionConfig | None = None) -> PageContext | None:
    """Navigate to *url* in a throwaway browser and extract its context.

    Returns None when the browser cannot start, navigation fails, or the
    extraction script errors or times out.
    """
    cfg = config or ExtractionConfig()
    try:
        return await _fetch(url, cfg)
    except TimeoutError:
        logger.info("Page-context fetch timed out for %s", url)
    except ExtractionError as exc:
        logger.warning("%s", exc)
    except Exception as exc:
        logger.warning("Page-context fetch failed for %s: %s", url, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
    return None


async def classify_with_page(
    tracking_number: str,
    page: Page | None = None,
    *,
    url: str | None = None,
    config: ExtractionConfig | None = None,
) -> Classification:
    """Classify with one best-effort context retrieval.

    With an open *page* its content is read in place; otherwise, when *url*
    is given, a throwaway browser fetches it.  If retrieval fails the URL (if
    any) still contributes domain evidence.
    """
    context: PageContext | None = None
    if page is not None:
        context = await extract_page_context(page, config)
    elif url:
        context = await fetch_page_context(url, config)

    if context is None and url:
        context = PageContext(url=url)
    return classify(tracking_number, context)
