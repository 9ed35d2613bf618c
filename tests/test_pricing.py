"""Tests for engine/pricing.py — hand-calculated expected values."""

from __future__ import annotations

import math

from carpool_pricing.config import PricingPolicy, TrafficInfo, TripParameters
from carpool_pricing.engine.pricing import INSUFFICIENT_INPUT, compute_price, round2


# ═══════════════════════════════════════════════════════════════════════════
# Reference scenarios
# ═══════════════════════════════════════════════════════════════════════════

def test_plain_petrol_trip(noon_trip: TripParameters):
    b = compute_price(noon_trip)
    # 20 × 0.10 = 2.00; / 4 seats = 0.50
    assert b.base_cost == 2.00
    assert b.total_cost == 2.00
    assert b.price_per_seat == 0.50
    assert b.traffic_multiplier == 1.0
    assert b.traffic_level == "No traffic data"
    assert b.delay_ratio is None
    assert b.is_peak_hour is False
    assert b.peak_hour_fee == 0.0
    assert b.currency == "JOD"


def test_ac_surcharge(noon_trip: TripParameters):
    b = compute_price(noon_trip.model_copy(update={"ac_enabled": True}))
    # 2.00 × 1.10 = 2.20; / 4 = 0.55
    assert b.ac_multiplier == 1.10
    assert b.cost_with_ac == 2.20
    assert b.ac_cost == 0.20
    assert b.total_cost == 2.20
    assert b.price_per_seat == 0.55


def test_peak_hour_fee(noon_trip: TripParameters):
    b = compute_price(noon_trip.model_copy(update={"departure_time": "2025-03-02T08:00"}))
    # fee = 20 × 0.05 = 1.00; total = 2.00 + 1.00 = 3.00; / 4 = 0.75
    assert b.is_peak_hour is True
    assert b.peak_hour_fee == 1.00
    assert b.total_cost == 3.00
    assert b.price_per_seat == 0.75


def test_very_heavy_traffic(congested_electric_trip: TripParameters):
    b = compute_price(congested_electric_trip)
    # 20 × 0.03 = 0.60; × 1.50 = 0.90; / 2 = 0.45
    assert b.base_cost == 0.60
    assert b.traffic_level == "Very heavy traffic"
    assert b.traffic_multiplier == 1.50
    assert b.delay_ratio == 1.7
    assert b.cost_with_traffic == 0.90
    assert b.traffic_cost == 0.30
    assert b.total_cost == 0.90
    assert b.price_per_seat == 0.45


def test_peak_fee_uses_raw_distance():
    """Peak fee is added after multipliers and is not scaled by AC or traffic."""
    trip = TripParameters(
        distance_km=10, fuel_type="petrol", seat_count=3, ac_enabled=True,
        departure_time="2025-03-02T08:15",
        traffic_info=TrafficInfo(normal_duration_seconds=1000, traffic_duration_seconds=1400),
    )
    b = compute_price(trip)
    # 1.00 × 1.10 × 1.30 = 1.43; + 10 × 0.05 = 1.93; / 3 = 0.643 → 0.64
    assert b.traffic_level == "Heavy traffic"
    assert b.cost_with_traffic == 1.43
    assert b.peak_hour_fee == 0.50
    assert b.total_cost == 1.93
    assert b.price_per_seat == 0.64


def test_hybrid_rate():
    b = compute_price(TripParameters(distance_km=50, fuel_type="hybrid", seat_count=3))
    # 50 × 0.06 = 3.00; / 3 = 1.00
    assert b.fuel_rate == 0.06
    assert b.total_cost == 3.00
    assert b.price_per_seat == 1.00


def test_unknown_fuel_type_falls_back_to_petrol():
    b = compute_price(TripParameters(distance_km=20, fuel_type="diesel", seat_count=4))
    assert b.fuel_type == "petrol"
    assert b.fuel_rate == 0.10
    assert b.price_per_seat == 0.50


def test_custom_policy_changes_price(noon_trip: TripParameters):
    policy = PricingPolicy(peak_hour_fee_per_km=0.10, fuel_rates={"petrol": 0.20})
    b = compute_price(noon_trip.model_copy(update={"departure_time": "2025-03-02T17:00"}), policy)
    # 20 × 0.20 = 4.00; + 20 × 0.10 = 2.00 → 6.00; / 4 = 1.50
    assert b.total_cost == 6.00
    assert b.price_per_seat == 1.50


def test_malformed_departure_time_is_off_peak(noon_trip: TripParameters):
    b = compute_price(noon_trip.model_copy(update={"departure_time": "sometime soon"}))
    assert b.is_peak_hour is False
    assert b.price_per_seat == 0.50


# ═══════════════════════════════════════════════════════════════════════════
# Insufficient input sentinel
# ═══════════════════════════════════════════════════════════════════════════

class TestInsufficientInput:
    """Missing/zero distance or seats → zero price, nothing else populated."""

    def test_missing_distance(self):
        b = compute_price(TripParameters(seat_count=4))
        assert b == INSUFFICIENT_INPUT
        assert b.price_per_seat == 0
        assert b.total_cost == 0
        assert b.base_cost is None
        assert not b.is_quotable

    def test_zero_distance(self):
        assert compute_price(TripParameters(distance_km=0, seat_count=4)).price_per_seat == 0

    def test_negative_distance(self):
        assert compute_price(TripParameters(distance_km=-5, seat_count=4)).price_per_seat == 0

    def test_missing_seats(self):
        assert compute_price(TripParameters(distance_km=20)).price_per_seat == 0

    def test_zero_seats(self):
        b = compute_price(TripParameters(distance_km=20, seat_count=0))
        assert b.price_per_seat == 0
        assert b.traffic_level is None

    def test_nan_distance(self):
        assert compute_price(TripParameters(distance_km=float("nan"), seat_count=4)).price_per_seat == 0

    def test_huge_distance_does_not_raise(self):
        b = compute_price(TripParameters(distance_km=1e308, seat_count=4))
        # 1e308 × 0.10 = 1e307, still finite
        assert b.is_quotable
        assert math.isfinite(b.total_cost)
        assert math.isfinite(b.price_per_seat)

    def test_overflowing_cost_is_insufficient(self):
        policy = PricingPolicy(fuel_rates={"petrol": 2.0})
        b = compute_price(TripParameters(distance_km=1.7e308, seat_count=4), policy)
        assert b == INSUFFICIENT_INPUT

    def test_blank_form_values_are_missing(self):
        b = compute_price(TripParameters(distance_km="", seat_count="  "))
        assert b == INSUFFICIENT_INPUT


# ═══════════════════════════════════════════════════════════════════════════
# Laws
# ═══════════════════════════════════════════════════════════════════════════

def _trips() -> list[TripParameters]:
    trips = []
    for distance in (3.7, 12.5, 20, 48.2):
        for fuel in ("petrol", "hybrid", "electric"):
            for ac in (False, True):
                for hour in ("07:30", "12:00", "16:45"):
                    trips.append(TripParameters(
                        distance_km=distance, fuel_type=fuel, seat_count=3, ac_enabled=ac,
                        departure_time=f"2025-03-02T{hour}",
                        traffic_info=TrafficInfo(normal_duration_seconds=900, traffic_duration_seconds=1100),
                    ))
    return trips


def test_reconstruction_law():
    for trip in _trips():
        b = compute_price(trip)
        raw = b.distance_km * b.fuel_rate * b.ac_multiplier * b.traffic_multiplier + b.peak_hour_fee
        assert abs(b.total_cost - round2(raw)) < 0.011
        assert b.price_per_seat == round2(b.total_cost / b.seat_count)


def test_same_input_same_output(congested_electric_trip: TripParameters):
    assert compute_price(congested_electric_trip) == compute_price(congested_electric_trip)


def test_total_non_decreasing_in_distance(noon_trip: TripParameters):
    totals = [
        compute_price(noon_trip.model_copy(update={"distance_km": d})).total_cost
        for d in range(1, 101)
    ]
    assert totals == sorted(totals)


def test_price_per_seat_non_increasing_in_seats(noon_trip: TripParameters):
    prices = [
        compute_price(noon_trip.model_copy(update={"seat_count": s})).price_per_seat
        for s in range(1, 9)
    ]
    assert prices == sorted(prices, reverse=True)


def test_round2_is_half_up():
    assert round2(0.125) == 0.13
    assert round2(2.0000000000000004) == 2.0
    assert round2(0.8999999999999999) == 0.9


def test_round2_leaves_unscalable_values_alone():
    assert round2(1e307) == 1e307
