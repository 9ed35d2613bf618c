"""Pydantic validation tests — malformed pricing policies are rejected."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from carpool_pricing.config import PeakWindow, PricingPolicy, TrafficBand, TripParameters


class TestPolicyValidation:
    """PricingPolicy field and cross-field constraints."""

    def test_defaults_are_valid(self):
        p = PricingPolicy()
        assert p.fuel_rates == {"petrol": 0.10, "hybrid": 0.06, "electric": 0.03}
        assert p.ac_multiplier == 1.10
        assert p.peak_hour_fee_per_km == 0.05
        assert [b.upper_ratio for b in p.traffic_bands] == [1.15, 1.35, 1.60, None]

    def test_ac_multiplier_below_one_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(ac_multiplier=0.9)

    def test_negative_peak_fee_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(peak_hour_fee_per_km=-0.01)

    def test_negative_fuel_rate_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(fuel_rates={"petrol": -0.1})

    def test_default_fuel_must_have_rate(self):
        with pytest.raises(ValidationError):
            PricingPolicy(fuel_rates={"hybrid": 0.06})

    def test_empty_bands_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(traffic_bands=[])

    def test_bounded_last_band_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(traffic_bands=[TrafficBand(upper_ratio=2.0, multiplier=1.0, label="x")])

    def test_unbounded_middle_band_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(traffic_bands=[
                TrafficBand(upper_ratio=None, multiplier=1.0, label="a"),
                TrafficBand(upper_ratio=None, multiplier=1.5, label="b"),
            ])

    def test_non_increasing_bands_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(traffic_bands=[
                TrafficBand(upper_ratio=1.5, multiplier=1.0, label="a"),
                TrafficBand(upper_ratio=1.2, multiplier=1.2, label="b"),
                TrafficBand(upper_ratio=None, multiplier=1.5, label="c"),
            ])

    def test_band_multiplier_below_one_rejected(self):
        with pytest.raises(ValidationError):
            TrafficBand(upper_ratio=1.2, multiplier=0.8, label="discount")

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError):
            PricingPolicy(timezone="Mars/Olympus_Mons")


class TestPeakWindowValidation:

    def test_start_after_end_rejected(self):
        with pytest.raises(ValidationError):
            PeakWindow(start_hour=9, end_hour=7)

    def test_empty_window_rejected(self):
        with pytest.raises(ValidationError):
            PeakWindow(start_hour=8, end_hour=8)

    def test_hour_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            PeakWindow(start_hour=7, end_hour=25)


class TestTripParameters:
    """Trip inputs are lenient: the engine, not the model, handles gaps."""

    def test_empty_trip_is_valid(self):
        t = TripParameters()
        assert t.distance_km is None
        assert t.seat_count is None
        assert t.fuel_type == "petrol"

    def test_unknown_fuel_accepted(self):
        assert TripParameters(fuel_type="diesel").fuel_type == "diesel"

    def test_trip_is_frozen(self):
        t = TripParameters(distance_km=10)
        with pytest.raises(ValidationError):
            t.distance_km = 20
