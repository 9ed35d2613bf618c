"""Result types — the contract between engine, provider, API and ride flows.

``PriceBreakdown`` is a pure derived value: it is never mutated and never
stored on its own.  Only ``price_per_seat`` and ``total_cost`` travel on to
the ride record.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from carpool_pricing.config.trip import TrafficInfo, blank_to_none


# ═══════════════════════════════════════════════════════════════════════════
# Price breakdown
# ═══════════════════════════════════════════════════════════════════════════

class PriceBreakdown(BaseModel):
    """Price per seat plus every factor that produced it.

    When the trip lacks a distance or seats, only ``price_per_seat`` and
    ``total_cost`` are set (both 0) and every other field stays ``None``.
    """

    model_config = ConfigDict(frozen=True)

    price_per_seat: float = 0.0
    """total_cost / seat_count, rounded to 2 decimals.  0 = insufficient input."""

    total_cost: float = 0.0
    """cost_with_traffic + peak_hour_fee, rounded to 2 decimals."""

    # --- Inputs as applied ---
    distance_km: float | None = None
    seat_count: int | None = None
    fuel_type: str | None = None
    """Effective fuel type (after fallback for unknown types)."""
    fuel_rate: float | None = None
    ac_enabled: bool | None = None

    # --- Base + AC ---
    base_cost: float | None = None
    """distance_km × fuel_rate."""
    ac_multiplier: float | None = None
    ac_cost: float | None = None
    """Surcharge added by AC = cost_with_ac − base_cost."""
    cost_with_ac: float | None = None

    # --- Traffic ---
    traffic_multiplier: float | None = None
    traffic_level: str | None = None
    delay_ratio: float | None = None
    """traffic_duration / normal_duration, or None without traffic data."""
    traffic_cost: float | None = None
    """Surcharge added by traffic = cost_with_traffic − cost_with_ac."""
    cost_with_traffic: float | None = None

    # --- Peak hour ---
    is_peak_hour: bool | None = None
    peak_hour_fee: float | None = None

    currency: str | None = None

    @property
    def is_quotable(self) -> bool:
        """False for the insufficient-input sentinel; callers block submission."""
        return self.price_per_seat > 0


# ═══════════════════════════════════════════════════════════════════════════
# Route lookup
# ═══════════════════════════════════════════════════════════════════════════

class Coordinates(BaseModel):
    """A WGS84 point."""

    lat: float
    lng: float


class RouteEstimate(BaseModel):
    """Resolved distance, with traffic durations when the provider had them."""

    distance_km: float
    traffic_info: TrafficInfo | None = None
    source: Literal["distance_matrix", "haversine", "none"] = "haversine"


# ═══════════════════════════════════════════════════════════════════════════
# Ride record
# ═══════════════════════════════════════════════════════════════════════════

class RideForm(BaseModel):
    """What the driver filled in on the create/edit ride form."""

    origin: str = ""
    destination: str = ""
    origin_lat: float | None = None
    origin_lng: float | None = None
    destination_lat: float | None = None
    destination_lng: float | None = None
    departure_time: datetime | None = None
    available_seats: int | None = None
    fuel_type: str = "petrol"
    ac_enabled: bool = False
    distance_km: float | None = None
    university_id: int | None = None
    direction: Literal["to_university", "from_university", ""] = "to_university"
    gender_preference: Literal["male_only", "female_only", "any"] = "any"
    notes: str = ""

    @field_validator(
        "available_seats", "distance_km", "origin_lat", "origin_lng",
        "destination_lat", "destination_lng", "university_id", "departure_time",
        mode="before",
    )
    @classmethod
    def blank_fields_are_missing(cls, value: Any) -> Any:
        return blank_to_none(value)


class RidePayload(BaseModel):
    """Body of ``POST /rides`` / ``PUT /rides/:id`` on the ride backend."""

    ride_id: int | None = None
    origin: str
    destination: str
    origin_lat: float | None = None
    origin_lng: float | None = None
    destination_lat: float | None = None
    destination_lng: float | None = None
    departure_time: datetime | None = None
    available_seats: int
    fuel_type: str
    ac_enabled: bool
    distance_km: float
    price_per_seat: float
    total_cost: float
    university_id: int
    direction: str
    gender_preference: str
    notes: str = ""
