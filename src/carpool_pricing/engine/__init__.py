"""Engine — deterministic ride pricing logic."""

from carpool_pricing.engine.pricing import compute_price, round2
from carpool_pricing.engine.traffic import TrafficAssessment, classify_traffic
from carpool_pricing.engine.peak_hours import extract_local_hour, is_peak_hour
from carpool_pricing.engine.sensitivity import run_price_sensitivity

__all__ = [
    "compute_price",
    "round2",
    "classify_traffic",
    "TrafficAssessment",
    "extract_local_hour",
    "is_peak_hour",
    "run_price_sensitivity",
]
