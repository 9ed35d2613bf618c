"""Result models — pricing, route and ride output contracts."""

from carpool_pricing.models.results import (
    Coordinates,
    PriceBreakdown,
    RideForm,
    RidePayload,
    RouteEstimate,
)

__all__ = [
    "Coordinates",
    "PriceBreakdown",
    "RideForm",
    "RidePayload",
    "RouteEstimate",
]
