"""Shared test fixtures — the reference trips used across the pricing tests."""

from __future__ import annotations

import pytest

from carpool_pricing.config import PricingPolicy, TrafficInfo, TripParameters
from carpool_pricing.models.results import RideForm


@pytest.fixture
def policy() -> PricingPolicy:
    return PricingPolicy()


@pytest.fixture
def noon_trip() -> TripParameters:
    """20 km petrol, 4 seats, no AC, no traffic data, off-peak."""
    return TripParameters(
        distance_km=20,
        fuel_type="petrol",
        seat_count=4,
        ac_enabled=False,
        departure_time="2025-03-02T12:00",
        traffic_info=None,
    )


@pytest.fixture
def congested_electric_trip() -> TripParameters:
    """20 km electric, 2 seats, delay ratio 1.7 (very heavy), off-peak."""
    return TripParameters(
        distance_km=20,
        fuel_type="electric",
        seat_count=2,
        departure_time="2025-03-02T12:00",
        traffic_info=TrafficInfo(normal_duration_seconds=1000, traffic_duration_seconds=1700),
    )


@pytest.fixture
def ride_form() -> RideForm:
    return RideForm(
        origin="Sweileh",
        destination="University of Jordan",
        origin_lat=32.0227,
        origin_lng=35.8408,
        destination_lat=32.0131,
        destination_lng=35.8722,
        departure_time="2099-09-01T12:00:00",
        available_seats=4,
        fuel_type="petrol",
        ac_enabled=False,
        distance_km=20,
        university_id=1,
        direction="to_university",
        gender_preference="any",
    )
