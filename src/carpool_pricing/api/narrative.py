"""Narrative generator — plain-English explanation of a price breakdown.

Produces the same lines the driver sees under the price: distance, fuel
rate, base cost, each surcharge that applies, and the per-seat split.
"""

from __future__ import annotations

from carpool_pricing.models.results import PriceBreakdown


def _money(value: float, currency: str) -> str:
    return f"{value:.2f} {currency}"


def generate_price_narrative(breakdown: PriceBreakdown) -> str:
    """Explain how a price per seat was reached."""
    if not breakdown.is_quotable:
        return "Fill in distance and seats to calculate the price."

    b = breakdown
    cur = b.currency or ""
    lines: list[str] = [
        f"Distance: {b.distance_km:g} km",
        f"Fuel rate ({b.fuel_type}): {b.fuel_rate:g} {cur}/km",
        f"Base cost ({b.distance_km:g} x {b.fuel_rate:g}): {_money(b.base_cost, cur)}",
    ]

    if b.ac_enabled:
        pct = (b.ac_multiplier - 1) * 100
        lines.append(f"AC surcharge (+{pct:.0f}%): +{_money(b.ac_cost, cur)}")

    if b.traffic_multiplier is not None and b.traffic_multiplier > 1:
        pct = (b.traffic_multiplier - 1) * 100
        lines.append(f"{b.traffic_level} (+{pct:.0f}%): +{_money(b.traffic_cost, cur)}")
    elif b.delay_ratio is None:
        lines.append(f"Traffic data: {b.traffic_level}")

    if b.is_peak_hour:
        lines.append(f"Peak hour fee: +{_money(b.peak_hour_fee, cur)}")

    lines.append(f"Total trip cost: {_money(b.total_cost, cur)}")
    lines.append(f"/ {b.seat_count} seats = {_money(b.price_per_seat, cur)} per seat")
    return "\n".join(lines)
