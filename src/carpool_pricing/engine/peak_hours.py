"""Peak-hour detection from a local departure timestamp."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from zoneinfo import ZoneInfo

from carpool_pricing.config.policy import PricingPolicy

logger = logging.getLogger(__name__)

# "...T08:30" — the time part of a datetime-local form value.
_TIME_PART = re.compile(r"T(\d{1,2}):")


def extract_local_hour(departure_time: datetime | str | None, timezone: str | None = None) -> int | None:
    """Return the local hour (0-23) of a departure time, or None if unknown.

    Naive datetimes are already local.  Aware datetimes are converted to
    ``timezone`` first when one is given.
    """
    if departure_time is None:
        return None

    if isinstance(departure_time, str):
        text = departure_time.strip()
        if not text:
            return None
        try:
            departure_time = datetime.fromisoformat(text)
        except ValueError:
            match = _TIME_PART.search(text)
            if match is None:
                logger.debug("Unparseable departure time %r treated as off-peak", text)
                return None
            hour = int(match.group(1))
            return hour if 0 <= hour <= 23 else None

    if timezone is not None and departure_time.tzinfo is not None:
        departure_time = departure_time.astimezone(ZoneInfo(timezone))
    return departure_time.hour


def is_peak_hour(departure_time: datetime | str | None, policy: PricingPolicy | None = None) -> bool:
    """True when the departure hour falls inside any peak window."""
    policy = policy or PricingPolicy()
    hour = extract_local_hour(departure_time, policy.timezone)
    if hour is None:
        return False
    return any(window.contains(hour) for window in policy.peak_windows)
