"""Pricing policy — every tunable constant of the fare model."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, model_validator


def _default_fuel_rates() -> dict[str, float]:
    # JOD/km.  Petrol ~1.08 JOD/L at ~9 L/100 km; hybrid ~40% less; electric is grid cost.
    return {"petrol": 0.10, "hybrid": 0.06, "electric": 0.03}


class TrafficBand(BaseModel):
    """One congestion band.  A delay ratio falls in the first band whose
    ``upper_ratio`` it is strictly below; ``None`` means unbounded."""

    upper_ratio: float | None = Field(default=None, gt=0, description="Exclusive upper bound on delay ratio")
    multiplier: float = Field(default=1.0, ge=1.0, description="Cost multiplier inside this band")
    label: str = Field(default="Light traffic", description="Human label shown to the driver")


def _default_traffic_bands() -> list[TrafficBand]:
    return [
        TrafficBand(upper_ratio=1.15, multiplier=1.00, label="Light traffic"),
        TrafficBand(upper_ratio=1.35, multiplier=1.15, label="Moderate traffic"),
        TrafficBand(upper_ratio=1.60, multiplier=1.30, label="Heavy traffic"),
        TrafficBand(upper_ratio=None, multiplier=1.50, label="Very heavy traffic"),
    ]


class PeakWindow(BaseModel):
    """Half-open hour window ``[start_hour, end_hour)`` of local time."""

    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=1, le=24)

    @model_validator(mode="after")
    def _check_order(self) -> "PeakWindow":
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"start_hour ({self.start_hour}) must be before end_hour ({self.end_hour})"
            )
        return self

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


def _default_peak_windows() -> list[PeakWindow]:
    # Jordan commuter peaks: 7-9 AM and 4-6 PM.
    return [PeakWindow(start_hour=7, end_hour=9), PeakWindow(start_hour=16, end_hour=18)]


class PricingPolicy(BaseModel):
    """Fare model constants, fixed per pricing run.

    Defaults reproduce the production fare table.  Override any field to
    evaluate an alternative policy without touching engine code.
    """

    # --- Fuel ---
    fuel_rates: dict[str, float] = Field(
        default_factory=_default_fuel_rates,
        description="Cost per km for each fuel type (JOD/km)",
    )
    default_fuel_type: str = Field(
        default="petrol",
        description="Rate used when the trip names an unknown fuel type",
    )

    # --- Surcharges ---
    ac_multiplier: float = Field(default=1.10, ge=1.0, description="Cost multiplier when AC is on")
    peak_hour_fee_per_km: float = Field(
        default=0.05, ge=0,
        description="Flat fee per km for departures inside a peak window (JOD/km). "
                    "Added after multipliers, computed on raw distance.",
    )

    # --- Traffic ---
    traffic_bands: list[TrafficBand] = Field(
        default_factory=_default_traffic_bands,
        description="Ordered congestion bands, first match wins",
    )
    no_traffic_label: str = Field(default="No traffic data", description="Label when no traffic data is available")

    # --- Peak hours ---
    peak_windows: list[PeakWindow] = Field(
        default_factory=_default_peak_windows,
        description="Local-time hour windows that attract the peak-hour fee",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA zone used to localise timezone-aware departure times "
                    "(e.g. 'Asia/Amman'). Naive times are always taken as local.",
    )

    currency: str = Field(default="JOD", description="Currency code for display")

    @model_validator(mode="after")
    def _check_policy(self) -> "PricingPolicy":
        if self.default_fuel_type not in self.fuel_rates:
            raise ValueError(f"default_fuel_type '{self.default_fuel_type}' has no entry in fuel_rates")
        for fuel, rate in self.fuel_rates.items():
            if rate < 0:
                raise ValueError(f"fuel rate for '{fuel}' must be non-negative, got {rate}")

        if not self.traffic_bands:
            raise ValueError("traffic_bands must not be empty")
        if self.traffic_bands[-1].upper_ratio is not None:
            raise ValueError("the last traffic band must be unbounded (upper_ratio=None)")
        previous = 0.0
        for band in self.traffic_bands[:-1]:
            if band.upper_ratio is None:
                raise ValueError("only the last traffic band may be unbounded")
            if band.upper_ratio <= previous:
                raise ValueError("traffic band upper_ratio values must be strictly increasing")
            previous = band.upper_ratio

        if self.timezone is not None:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"unknown timezone '{self.timezone}'") from exc
        return self
