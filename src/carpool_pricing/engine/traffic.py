"""Traffic banding — delay ratio → cost multiplier + label.

delay_ratio = traffic_duration / normal_duration.  Bands are evaluated in
order and the first band whose upper bound exceeds the ratio wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from carpool_pricing.config.policy import PricingPolicy
from carpool_pricing.config.trip import TrafficInfo


@dataclass(frozen=True)
class TrafficAssessment:
    """Outcome of classifying one route's traffic."""

    multiplier: float
    label: str
    delay_ratio: float | None = None


def compute_delay_ratio(traffic_info: TrafficInfo | None) -> float | None:
    """Return the delay ratio, or None when durations are missing or non-positive."""
    if traffic_info is None or not traffic_info.is_usable:
        return None
    return traffic_info.traffic_duration_seconds / traffic_info.normal_duration_seconds


def classify_traffic(
    traffic_info: TrafficInfo | None,
    policy: PricingPolicy | None = None,
) -> TrafficAssessment:
    """Map traffic durations onto the policy's congestion bands.

    No usable traffic data is a normal state, not an error: it yields a
    ×1.00 multiplier and the policy's ``no_traffic_label``.
    """
    policy = policy or PricingPolicy()

    ratio = compute_delay_ratio(traffic_info)
    if ratio is None:
        return TrafficAssessment(multiplier=1.0, label=policy.no_traffic_label)

    for band in policy.traffic_bands:
        if band.upper_ratio is None or ratio < band.upper_ratio:
            return TrafficAssessment(multiplier=band.multiplier, label=band.label, delay_ratio=ratio)

    # Unreachable for a validated policy: the last band is unbounded.
    last = policy.traffic_bands[-1]
    return TrafficAssessment(multiplier=last.multiplier, label=last.label, delay_ratio=ratio)
