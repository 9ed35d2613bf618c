"""Configuration models — trip inputs, pricing policy, service settings."""

from carpool_pricing.config.trip import FuelType, TrafficInfo, TripParameters
from carpool_pricing.config.policy import PeakWindow, PricingPolicy, TrafficBand
from carpool_pricing.config.settings import ServiceSettings

__all__ = [
    "FuelType",
    "TrafficInfo",
    "TripParameters",
    "PeakWindow",
    "PricingPolicy",
    "TrafficBand",
    "ServiceSettings",
]
