"""Ride submission — turn a filled-in ride form plus its price into the
record sent to the ride backend.

Both the create flow (``POST /rides``) and the edit flow
(``PUT /rides/:id``) go through the same checks and the same
``compute_price``.
"""

from __future__ import annotations

from datetime import datetime

from carpool_pricing.config.policy import PricingPolicy
from carpool_pricing.config.trip import TrafficInfo, TripParameters
from carpool_pricing.engine.pricing import compute_price
from carpool_pricing.models.results import PriceBreakdown, RideForm, RidePayload

MISSING_PRICE_MESSAGE = "Please fill in distance and seats to calculate the price"
MISSING_UNIVERSITY_MESSAGE = "Please select a university"
PAST_DEPARTURE_MESSAGE = "Departure time cannot be in the past. Please select a future date and time."


class RideValidationError(ValueError):
    """A ride form cannot be submitted; ``str(exc)`` is the user-facing message."""


def trip_from_form(form: RideForm, traffic_info: TrafficInfo | None = None) -> TripParameters:
    """Pricing inputs taken from a ride form."""
    return TripParameters(
        distance_km=form.distance_km,
        fuel_type=form.fuel_type,
        seat_count=form.available_seats,
        ac_enabled=form.ac_enabled,
        departure_time=form.departure_time,
        traffic_info=traffic_info,
    )


def price_form(
    form: RideForm,
    traffic_info: TrafficInfo | None = None,
    policy: PricingPolicy | None = None,
) -> PriceBreakdown:
    """Price a ride form with the shared pricing engine."""
    return compute_price(trip_from_form(form, traffic_info), policy)


def _validate(form: RideForm, breakdown: PriceBreakdown, now: datetime | None) -> None:
    if not breakdown.is_quotable:
        raise RideValidationError(MISSING_PRICE_MESSAGE)
    if form.university_id is None:
        raise RideValidationError(MISSING_UNIVERSITY_MESSAGE)
    if form.departure_time is not None:
        now = now or datetime.now(form.departure_time.tzinfo)
        if form.departure_time < now:
            raise RideValidationError(PAST_DEPARTURE_MESSAGE)


def prepare_ride_payload(
    form: RideForm,
    breakdown: PriceBreakdown,
    now: datetime | None = None,
) -> RidePayload:
    """Validate a new ride and build its ``POST /rides`` body.

    Raises
    ------
    RideValidationError
        Price is the zero sentinel, no university is selected, or the
        departure time is in the past.
    """
    _validate(form, breakdown, now)
    return RidePayload(
        origin=form.origin,
        destination=form.destination,
        origin_lat=form.origin_lat,
        origin_lng=form.origin_lng,
        destination_lat=form.destination_lat,
        destination_lng=form.destination_lng,
        departure_time=form.departure_time,
        available_seats=breakdown.seat_count,
        fuel_type=form.fuel_type,
        ac_enabled=form.ac_enabled,
        distance_km=breakdown.distance_km,
        price_per_seat=breakdown.price_per_seat,
        total_cost=breakdown.total_cost,
        university_id=form.university_id,
        direction=form.direction,
        gender_preference=form.gender_preference,
        notes=form.notes,
    )


def prepare_ride_update(
    ride_id: int,
    form: RideForm,
    breakdown: PriceBreakdown,
    now: datetime | None = None,
) -> RidePayload:
    """Same as :func:`prepare_ride_payload`, for ``PUT /rides/:id``."""
    payload = prepare_ride_payload(form, breakdown, now)
    return payload.model_copy(update={"ride_id": ride_id})
