# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Static per-carrier metadata: display label, icon, tracking URL template."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from . import CarrierId


@dataclass(frozen=True, slots=True)
class CarrierInfo:
    """Display metadata for one carrier."""

    carrier: CarrierId
    label: str
    icon: str
    url_template: str | None  # "{number}" placeholder; None = no public tracking page


CARRIER_INFO: dict[CarrierId, CarrierInfo] = {
    CarrierId.UPS: CarrierInfo(
        CarrierId.UPS, "UPS", "🚚", "https://www.ups.com/track?trackingNumber={number}"
    ),
    CarrierId.FEDEX: CarrierInfo(
        CarrierId.FEDEX, "FedEx", "📦", "https://www.fedex.com/fedextrack/?trknbr={number}"
    ),
    CarrierId.USPS: CarrierInfo(
        CarrierId.USPS, "USPS", "📮", "https://tools.usps.com/go/TrackConfirmAction?qtc_tLabels1={number}"
    ),
    CarrierId.DHL: CarrierInfo(
        CarrierId.DHL, "DHL", "🌍", "https://www.dhl.com/tracking?trackingNumber={number}"
    ),
    CarrierId.AMAZON: CarrierInfo(
        CarrierId.AMAZON, "Amazon", "📱", "https://www.amazon.com/progress-tracker/package/{number}"
    ),
    CarrierId.ONTRAC: CarrierInfo(
        CarrierId.ONTRAC, "OnTrac", "🚛", "https://www.ontrac.com/tracking?trackingNumber={number}"
    ),
    CarrierId.LASERSHIP: CarrierInfo(
        CarrierId.LASERSHIP, "LaserShip", "🚚", "https://www.lasership.com/track/{number}"
    ),
    CarrierId.OTHER: CarrierInfo(CarrierId.OTHER, "Other", "📦", None),
}


def carrier_info(carrier: CarrierId | str) -> CarrierInfo:
    """Metadata for *carrier*.  Raises UnknownCarrierError for unknown ids."""
    return CARRIER_INFO[CarrierId.parse(carrier)]


def available_carriers() -> list[CarrierInfo]:
    """All carriers in declaration order, OTHER last."""
    return [CARRIER_INFO[c] for c in CarrierId]


def build_tracking_url(carrier: CarrierId, tracking_number: str) -> str | None:
    template = CARRIER_INFO[carrier].url_template
    if template is None:
        return None
    return template.format(number=quote(tracking_number.strip(), safe=""))
