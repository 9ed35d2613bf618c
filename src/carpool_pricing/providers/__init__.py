"""Route providers — distance and traffic lookups feeding the pricing engine."""

from carpool_pricing.providers.distance import (
    DistanceMatrixClient,
    haversine_km,
    resolve_route,
)

__all__ = ["DistanceMatrixClient", "haversine_km", "resolve_route"]
