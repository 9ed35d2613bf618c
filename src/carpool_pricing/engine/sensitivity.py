"""Price sensitivity / tornado analysis.

Vary one input at a time, measure the change in price per seat.  Used to
judge which policy constants and trip inputs move the fare most.

Default sweep set:
  - trip.distance_km ± 25%
  - trip.seat_count ± 50%
  - policy.fuel_rates.petrol ± 20%
  - policy.ac_multiplier ± 5%
  - policy.peak_hour_fee_per_km ± 50%
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from carpool_pricing.config.policy import PricingPolicy
from carpool_pricing.config.trip import TripParameters
from carpool_pricing.engine.pricing import compute_price


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_path: str
    """Dot-path rooted at ``trip`` or ``policy`` (e.g. 'policy.fuel_rates.petrol')."""

    base_value: float
    low_value: float
    high_value: float

    price_at_low: float
    """Price per seat when param = low_value."""

    price_at_high: float
    """Price per seat when param = high_value."""

    delta_price: float
    """abs(price_at_high − price_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_price_per_seat: float
    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_price (descending)."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Trip distance", "trip.distance_km", -0.25, 0.25),
    ("Seats offered", "trip.seat_count", -0.50, 0.50),
    ("Petrol rate", "policy.fuel_rates.petrol", -0.20, 0.20),
    ("AC multiplier", "policy.ac_multiplier", -0.05, 0.05),
    ("Peak-hour fee", "policy.peak_hour_fee_per_km", -0.50, 0.50),
]


def _dump(trip: TripParameters, policy: PricingPolicy) -> dict[str, Any]:
    # Plain dicts so frozen models can be edited along a dot-path.
    return {"trip": trip.model_dump(), "policy": policy.model_dump()}


def _get_nested(data: dict[str, Any], path: str) -> float:
    """Get a nested value via dot-path string."""
    current: Any = data
    for part in path.split("."):
        current = current[part]
    if current is None:
        raise KeyError(path)
    if isinstance(current, bool):
        raise TypeError(f"{path} is not numeric")
    return float(current)


def _set_nested(data: dict[str, Any], path: str, value: float) -> None:
    """Set a nested value via dot-path string.

    Integer targets are rounded (and kept >= 1) so seat sweeps stay valid.
    """
    parts = path.split(".")
    current: Any = data
    for part in parts[:-1]:
        current = current[part]
    if isinstance(current[parts[-1]], int) and not isinstance(current[parts[-1]], bool):
        value = max(1, round(value))
    current[parts[-1]] = value


def _price(data: dict[str, Any]) -> float:
    trip = TripParameters.model_validate(data["trip"])
    policy = PricingPolicy.model_validate(data["policy"])
    return compute_price(trip, policy).price_per_seat


def run_price_sensitivity(
    trip: TripParameters,
    policy: PricingPolicy | None = None,
    sweeps: list[tuple[str, str, float, float]] | None = None,
) -> SensitivityResult:
    """Run sensitivity analysis for one trip under one policy.

    Parameters
    ----------
    trip : TripParameters
        Base trip.
    policy : PricingPolicy | None
        Base policy. None = defaults.
    sweeps : list[tuple[name, path, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.

    Returns
    -------
    SensitivityResult
        Tornado bars sorted by price impact.  Sweeps whose path is missing
        or unset for this trip are skipped.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS
    policy = policy or PricingPolicy()

    base = _dump(trip, policy)
    base_price = _price(base)

    bars: list[TornadoBar] = []

    for name, path, low_pct, high_pct in sweeps:
        try:
            base_val = _get_nested(base, path)
        except (KeyError, TypeError, ValueError):
            continue

        low = deepcopy(base)
        _set_nested(low, path, base_val * (1 + low_pct))
        high = deepcopy(base)
        _set_nested(high, path, base_val * (1 + high_pct))

        low_val = _get_nested(low, path)
        high_val = _get_nested(high, path)
        price_low = _price(low)
        price_high = _price(high)

        bars.append(TornadoBar(
            param_name=name,
            param_path=path,
            base_value=round(base_val, 4),
            low_value=round(low_val, 4),
            high_value=round(high_val, 4),
            price_at_low=price_low,
            price_at_high=price_high,
            delta_price=round(abs(price_high - price_low), 2),
        ))

    # Sort by impact (largest swing first)
    bars.sort(key=lambda b: b.delta_price, reverse=True)

    return SensitivityResult(base_price_per_seat=base_price, bars=bars)
