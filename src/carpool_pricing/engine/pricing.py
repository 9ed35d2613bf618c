"""Ride pricing — trip parameters → price per seat + cost breakdown.

    base_cost         = distance × fuel_rate
    cost_with_ac      = base_cost × ac_multiplier
    cost_with_traffic = cost_with_ac × traffic_multiplier
    peak_hour_fee     = distance × peak_fee_per_km        (peak windows only)
    total_cost        = round2(cost_with_traffic + peak_hour_fee)
    price_per_seat    = round2(total_cost / seats)

Shared by the create-ride and edit-ride flows.  Pure: same input, same output.
"""

from __future__ import annotations

import logging
import math

from carpool_pricing.config.policy import PricingPolicy
from carpool_pricing.config.trip import TripParameters
from carpool_pricing.engine.peak_hours import is_peak_hour
from carpool_pricing.engine.traffic import classify_traffic
from carpool_pricing.models.results import PriceBreakdown

logger = logging.getLogger(__name__)

INSUFFICIENT_INPUT = PriceBreakdown(price_per_seat=0.0, total_cost=0.0)


def round2(value: float) -> float:
    """Round half-up to 2 decimals (money).

    Values too large to scale by 100 are returned unchanged.
    """
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / 100


def resolve_fuel_rate(fuel_type: str | None, policy: PricingPolicy) -> tuple[str, float]:
    """Return (effective_fuel_type, rate).  Unknown types use the default rate."""
    if fuel_type in policy.fuel_rates:
        return fuel_type, policy.fuel_rates[fuel_type]
    logger.debug("Unknown fuel type %r, using %s rate", fuel_type, policy.default_fuel_type)
    return policy.default_fuel_type, policy.fuel_rates[policy.default_fuel_type]


def _has_pricing_inputs(params: TripParameters) -> bool:
    distance = params.distance_km
    seats = params.seat_count
    if distance is None or seats is None:
        return False
    if not math.isfinite(distance):
        return False
    return distance > 0 and seats > 0


def compute_price(params: TripParameters, policy: PricingPolicy | None = None) -> PriceBreakdown:
    """Price one ride.

    Never raises.  Missing or non-positive distance/seats yield the
    zero-price sentinel; callers must block submission when
    ``price_per_seat`` is 0.
    """
    policy = policy or PricingPolicy()

    if not _has_pricing_inputs(params):
        return INSUFFICIENT_INPUT

    distance = float(params.distance_km)
    seats = int(params.seat_count)

    # 1. Base cost
    fuel_type, rate = resolve_fuel_rate(params.fuel_type, policy)
    base_cost = distance * rate

    # 2. AC surcharge
    ac_multiplier = policy.ac_multiplier if params.ac_enabled else 1.0
    cost_with_ac = base_cost * ac_multiplier

    # 3. Traffic
    traffic = classify_traffic(params.traffic_info, policy)
    cost_with_traffic = cost_with_ac * traffic.multiplier

    # 4. Peak-hour fee, additive, on raw distance
    peak = is_peak_hour(params.departure_time, policy)
    peak_hour_fee = distance * policy.peak_hour_fee_per_km if peak else 0.0

    # 5. Totals
    if not math.isfinite(cost_with_traffic + peak_hour_fee):
        logger.debug("Trip cost overflows for distance %s, treating as insufficient input", distance)
        return INSUFFICIENT_INPUT
    total_cost = round2(cost_with_traffic + peak_hour_fee)
    price_per_seat = round2(total_cost / seats)

    return PriceBreakdown(
        price_per_seat=price_per_seat,
        total_cost=total_cost,
        distance_km=distance,
        seat_count=seats,
        fuel_type=fuel_type,
        fuel_rate=rate,
        ac_enabled=params.ac_enabled,
        base_cost=round2(base_cost),
        ac_multiplier=ac_multiplier,
        ac_cost=round2(cost_with_ac - base_cost),
        cost_with_ac=round2(cost_with_ac),
        traffic_multiplier=traffic.multiplier,
        traffic_level=traffic.label,
        delay_ratio=round(traffic.delay_ratio, 4) if traffic.delay_ratio is not None else None,
        traffic_cost=round2(cost_with_traffic - cost_with_ac),
        cost_with_traffic=round2(cost_with_traffic),
        is_peak_hour=peak,
        peak_hour_fee=round2(peak_hour_fee),
        currency=policy.currency,
    )
