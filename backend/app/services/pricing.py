"""Instant estimate calculation for the quote widget.

An estimate is ``round((base_price + square_footage * price_per_sqft) * factor)``
where ``factor`` is drawn uniformly from ``[1 - variance, 1 + variance]`` to
mimic the spread of a hand estimate. Base price and per-square-foot rate come
from the service entry in the pricing configuration whose slugged name matches
the requested service type. The estimate is computed once when a lead is
submitted and stored with it.
"""

import math
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from backend.app.core.settings import get_settings
from backend.app.services.service_catalog import slug_service


class UnknownServiceError(ValueError):
    """Raised when a service type has no entry in the pricing configuration."""

    def __init__(self, service_type: str):
        super().__init__(f"Unknown service type: {service_type}")
        self.service_type = service_type


def find_service(pricing: dict, service_type: str | None) -> dict:
    key = slug_service(service_type)
    if key:
        for service in pricing.get("services") or []:
            if slug_service(service.get("name")) == key:
                return service
    raise UnknownServiceError(service_type or "")


def coerce_square_footage(value, default: Optional[int] = None) -> int:
    """Return a usable footage; blank, zero, negative or garbage input falls back to the default."""
    if default is None:
        default = get_settings().default_square_footage
    try:
        sqft = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    if sqft <= 0:
        return default
    return sqft


def _variance(variance: Optional[float]) -> float:
    if variance is None:
        variance = get_settings().estimate_variance
    return min(max(float(variance), 0.0), 1.0)


def _raw_price(service: dict, sqft: int) -> float:
    base_price = float(service.get("basePrice") or 0)
    per_sqft = float(service.get("pricePerSqft") or 0)
    return base_price + sqft * per_sqft


def _whole(amount: float) -> int:
    """Round half up to a non-negative integer; overflowing or NaN prices count as zero."""
    if not math.isfinite(amount) or amount <= 0:
        return 0
    return int(Decimal(str(amount)).to_integral_value(rounding=ROUND_HALF_UP))


def calculate_estimate(
    service_type: str | None,
    square_footage,
    pricing: dict,
    rng: Optional[random.Random] = None,
    variance: Optional[float] = None,
) -> int:
    service = find_service(pricing, service_type)
    sqft = coerce_square_footage(square_footage)
    spread = _variance(variance)
    draw = (rng or random).random()
    factor = (1 - spread) + draw * 2 * spread
    return _whole(_raw_price(service, sqft) * factor)


def estimate_bounds(service_type: str | None, square_footage, pricing: dict, variance: Optional[float] = None) -> tuple[int, int]:
    """Lowest and highest estimate the random factor can produce."""
    service = find_service(pricing, service_type)
    spread = _variance(variance)
    raw = _raw_price(service, coerce_square_footage(square_footage))
    return _whole(raw * (1 - spread)), _whole(raw * (1 + spread))
