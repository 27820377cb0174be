# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Hosting-domain -> carrier lookup.

Resolution order for a page URL's hostname:
  1. exact match against the table
  2. substring fallback: the table key (leading ``www.`` stripped) is
     contained anywhere in the hostname

The first hit in table declaration order wins.  The substring fallback is
known to over-match (``ups.com`` is a substring of ``groups.com``); it is
kept as-is so results stay comparable with existing stored classifications.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from urllib.parse import urlparse

from . import CarrierId

logger = logging.getLogger(__name__)

_DOMAINS: dict[str, CarrierId] = {
    "ups.com": CarrierId.UPS,
    "fedex.com": CarrierId.FEDEX,
    "usps.com": CarrierId.USPS,
    "dhl.com": CarrierId.DHL,
    "amazon.com": CarrierId.AMAZON,
    "ontrac.com": CarrierId.ONTRAC,
    "lasership.com": CarrierId.LASERSHIP,
    "track.ups.com": CarrierId.UPS,
    "www.fedex.com": CarrierId.FEDEX,
    "tools.usps.com": CarrierId.USPS,
    "webtrack.dhl.com": CarrierId.DHL,
}

DOMAIN_MAP: MappingProxyType[str, CarrierId] = MappingProxyType(_DOMAINS)


def _hostname(url: str) -> str | None:
    try:
        host = urlparse(url).hostname
    except ValueError:
        # Unbalanced IPv6 brackets and similar
        return None
    return host.lower() if host else None


def lookup_by_host(url: str) -> CarrierId | None:
    """Carrier for the page at *url*, or None if malformed or unknown."""
    host = _hostname(url)
    if host is None:
        logger.debug("No hostname in %r", url)
        return None

    carrier = DOMAIN_MAP.get(host)
    if carrier is not None:
        return carrier

    for domain, carrier in DOMAIN_MAP.items():
        if domain.removeprefix("www.") in host:
            logger.debug("Host %s matched %s by substring", host, domain)
            return carrier
    return None
