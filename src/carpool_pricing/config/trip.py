"""Trip parameters — the per-ride inputs to the pricing engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def blank_to_none(value: Any) -> Any:
    """Map an empty or whitespace-only form value to None."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class FuelType(str, Enum):
    """Fuel types with a published per-km rate."""

    PETROL = "petrol"
    HYBRID = "hybrid"
    ELECTRIC = "electric"


class TrafficInfo(BaseModel):
    """Normal vs. traffic-affected travel time for one route."""

    model_config = ConfigDict(frozen=True)

    normal_duration_seconds: float | None = Field(
        default=None,
        description="Travel time without traffic (seconds)",
    )
    traffic_duration_seconds: float | None = Field(
        default=None,
        description="Travel time under current traffic (seconds)",
    )

    @property
    def is_usable(self) -> bool:
        """Both durations present and positive."""
        return (
            self.normal_duration_seconds is not None
            and self.traffic_duration_seconds is not None
            and self.normal_duration_seconds > 0
            and self.traffic_duration_seconds > 0
        )


class TripParameters(BaseModel):
    """Everything the engine needs to price one ride.

    Deliberately lenient: distance and seats may be missing, fuel type may be
    an unrecognised string, and the departure time may be unparseable.  The
    engine degrades those to sentinel values rather than failing.
    """

    model_config = ConfigDict(frozen=True)

    distance_km: float | None = Field(default=None, description="Trip distance (km)")
    fuel_type: str = Field(default=FuelType.PETROL.value, description="petrol, hybrid or electric")
    seat_count: int | None = Field(default=None, description="Seats offered to passengers")
    ac_enabled: bool = Field(default=False, description="Whether the AC surcharge applies")
    departure_time: datetime | str | None = Field(
        default=None,
        description="Local departure timestamp, e.g. '2025-03-02T08:30'. "
                    "Only its hour is used (peak-hour detection).",
    )
    traffic_info: TrafficInfo | None = Field(
        default=None,
        description="Route durations from a traffic-aware provider; omit when unavailable",
    )

    @field_validator("distance_km", "seat_count", mode="before")
    @classmethod
    def blank_numbers_are_missing(cls, value: Any) -> Any:
        return blank_to_none(value)
