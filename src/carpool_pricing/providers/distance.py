"""Distance and traffic lookup.

The Distance Matrix service supplies road distance plus normal and
traffic-affected durations.  When it is unconfigured or fails, the
great-circle (haversine) distance is used and traffic data is omitted,
which the pricing engine handles as "No traffic data".
"""

from __future__ import annotations

import logging
from datetime import datetime

import numpy as np
import requests

from carpool_pricing.config.settings import ServiceSettings
from carpool_pricing.config.trip import TrafficInfo
from carpool_pricing.models.results import Coordinates, RouteEstimate

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance in km.  Accepts scalars or numpy arrays."""
    lat1, lon1, lat2, lon2 = (np.radians(np.asarray(v, dtype=float)) for v in (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    distance = EARTH_RADIUS_KM * c
    if np.ndim(distance) == 0:
        return float(distance)
    return distance


class DistanceMatrixClient:
    """Synchronous client for a Google-style Distance Matrix endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        if not api_key:
            raise ValueError("Distance Matrix API key required. Set CARPOOL_GOOGLE_MAPS_API_KEY")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: ServiceSettings) -> DistanceMatrixClient | None:
        """Build a client, or None when no API key is configured."""
        if not settings.google_maps_api_key:
            return None
        return cls(
            api_key=settings.google_maps_api_key,
            base_url=settings.distance_matrix_url,
            timeout=settings.request_timeout_seconds,
        )

    def _params(self, origin: Coordinates, destination: Coordinates, departure_time: datetime | None) -> dict:
        departure = "now"
        # The service rejects departure times in the past.
        if departure_time is not None and departure_time > datetime.now(departure_time.tzinfo):
            departure = str(int(departure_time.timestamp()))
        return {
            "origins": f"{origin.lat},{origin.lng}",
            "destinations": f"{destination.lat},{destination.lng}",
            "mode": "driving",
            "departure_time": departure,
            "traffic_model": "best_guess",
            "key": self.api_key,
        }

    def fetch_route(
        self,
        origin: Coordinates,
        destination: Coordinates,
        departure_time: datetime | None = None,
    ) -> RouteEstimate | None:
        """Look up road distance and traffic durations.

        Returns None on any transport, status or parsing failure.
        """
        try:
            response = self.session.get(
                self.base_url,
                params=self._params(origin, destination, departure_time),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

            if data.get("status") != "OK":
                logger.warning("Distance Matrix returned status %s", data.get("status"))
                return None

            element = data["rows"][0]["elements"][0]
            if element.get("status") != "OK":
                logger.warning("Distance Matrix element status %s", element.get("status"))
                return None

            distance_km = element["distance"]["value"] / 1000
            normal = element["duration"]["value"]
            in_traffic = element.get("duration_in_traffic", {}).get("value", normal)

        except requests.RequestException as e:
            logger.warning("Distance Matrix request failed: %s", e)
            return None
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Unexpected Distance Matrix response: %s", e)
            return None

        return RouteEstimate(
            distance_km=round(distance_km, 1),
            traffic_info=TrafficInfo(
                normal_duration_seconds=normal,
                traffic_duration_seconds=in_traffic,
            ),
            source="distance_matrix",
        )


def resolve_route(
    origin: Coordinates | None,
    destination: Coordinates | None,
    client: DistanceMatrixClient | None = None,
    departure_time: datetime | None = None,
) -> RouteEstimate:
    """Best available route estimate.  Never raises.

    Missing endpoints give a zero distance, which prices to the
    insufficient-input sentinel.
    """
    if origin is None or destination is None:
        return RouteEstimate(distance_km=0.0, source="none")

    if client is not None:
        estimate = client.fetch_route(origin, destination, departure_time)
        if estimate is not None:
            return estimate
        logger.info("Falling back to haversine distance")

    distance = haversine_km(origin.lat, origin.lng, destination.lat, destination.lng)
    return RouteEstimate(distance_km=round(distance, 1), source="haversine")
