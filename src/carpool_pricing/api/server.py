"""FastAPI server — ride pricing API.

Run with:
    uvicorn carpool_pricing.api.server:app --reload --port 8000

Or:
    python -m carpool_pricing.api.server

Endpoints:
    GET  /policy/defaults        — default pricing policy as JSON
    GET  /schema                 — JSON Schema for trip + policy inputs
    POST /price                  — price one trip (partial policy overrides allowed)
    POST /price/sensitivity      — parameter sweep → tornado data
    POST /route                  — resolve distance + traffic between two points
    POST /rides/prepare          — validate + build a new ride record
    PUT  /rides/{ride_id}/prepare — validate + build an updated ride record
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from carpool_pricing.api.narrative import generate_price_narrative
from carpool_pricing.api.rides import (
    RideValidationError,
    prepare_ride_payload,
    prepare_ride_update,
    price_form,
)
from carpool_pricing.config.policy import PricingPolicy
from carpool_pricing.config.settings import ServiceSettings
from carpool_pricing.config.trip import TrafficInfo, TripParameters
from carpool_pricing.engine.pricing import compute_price
from carpool_pricing.engine.sensitivity import run_price_sensitivity
from carpool_pricing.logging_setup import setup_logging
from carpool_pricing.models.results import Coordinates, PriceBreakdown, RideForm, RouteEstimate
from carpool_pricing.providers.distance import DistanceMatrixClient, resolve_route

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_settings() -> ServiceSettings:
    return ServiceSettings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.json_logs)
    yield


app = FastAPI(
    title="Carpool Ride Pricing API",
    version="1.0",
    description=(
        "Fuel-cost sharing for student carpools. Prices a ride from distance, "
        "fuel type, AC, traffic and departure time, and prepares ride records "
        "for the ride backend."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class PriceRequest(BaseModel):
    """Request body for /price."""
    trip: TripParameters = Field(default_factory=TripParameters)
    policy: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial PricingPolicy JSON. Missing fields use defaults. "
                    "Example: {'peak_hour_fee_per_km': 0.08, 'fuel_rates': {'petrol': 0.12}}",
    )


class PriceResponse(BaseModel):
    """Response from /price."""
    breakdown: PriceBreakdown
    narrative: str = ""


class SweepParam(BaseModel):
    """One parameter sweep for /price/sensitivity."""
    path: str = Field(description="Dot-path rooted at trip or policy, e.g. 'policy.fuel_rates.petrol'")
    name: str | None = Field(default=None, description="Label for the tornado bar. Defaults to the path.")
    low_pct: float = Field(default=-0.15, description="Relative change for the low end")
    high_pct: float = Field(default=0.15, description="Relative change for the high end")


class SensitivityRequest(BaseModel):
    """Request body for /price/sensitivity."""
    trip: TripParameters = Field(default_factory=TripParameters)
    policy: dict[str, Any] = Field(default_factory=dict)
    sweep_params: list[SweepParam] | None = Field(
        default=None,
        description="Optional override of sweep parameters. "
                    "Format: [{'name': 'Petrol rate', 'path': 'policy.fuel_rates.petrol', 'low_pct': -0.2, 'high_pct': 0.2}]",
    )


class RouteRequest(BaseModel):
    """Request body for /route."""
    origin: Coordinates | None = None
    destination: Coordinates | None = None
    departure_time: datetime | None = None


class RidePrepareRequest(BaseModel):
    """Request body for /rides/prepare."""
    form: RideForm
    traffic_info: TrafficInfo | None = None
    policy: dict[str, Any] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_policy(overrides: dict[str, Any]) -> PricingPolicy:
    """Build a PricingPolicy from partial overrides merged onto defaults."""
    defaults = PricingPolicy().model_dump()
    timezone = get_settings().timezone
    if timezone and "timezone" not in overrides:
        defaults["timezone"] = timezone
    _deep_merge(defaults, overrides)
    try:
        return PricingPolicy(**defaults)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=_validation_detail(exc)) from exc


def _validation_detail(exc: ValidationError) -> list[dict[str, Any]]:
    """JSON-safe summary of a pydantic ValidationError."""
    return [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in exc.errors()]


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Carpool Ride Pricing API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/policy/defaults")
def get_policy_defaults():
    """Default pricing policy. Use as a starting point for overrides."""
    return _build_policy({}).model_dump()


@app.get("/schema")
def get_schema():
    """JSON Schema for trip parameters and pricing policy."""
    return {
        "trip": TripParameters.model_json_schema(),
        "policy": PricingPolicy.model_json_schema(),
    }


@app.post("/price", response_model=PriceResponse)
def price(req: PriceRequest):
    """Price one trip.

    Insufficient input (no distance or seats) is not an error: the
    breakdown comes back with ``price_per_seat`` 0.
    """
    policy = _build_policy(req.policy)
    breakdown = compute_price(req.trip, policy)
    return PriceResponse(breakdown=breakdown, narrative=generate_price_narrative(breakdown))


@app.post("/price/sensitivity")
def price_sensitivity(req: SensitivityRequest):
    """Vary one input at a time and rank inputs by price-per-seat swing."""
    policy = _build_policy(req.policy)

    sweep_config = None
    if req.sweep_params:
        sweep_config = [
            (sp.name or sp.path, sp.path, sp.low_pct, sp.high_pct)
            for sp in req.sweep_params
        ]

    try:
        result = run_price_sensitivity(req.trip, policy, sweep_config)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=_validation_detail(exc)) from exc

    return {
        "base_price_per_seat": result.base_price_per_seat,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_path": bar.param_path,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "price_at_low": bar.price_at_low,
                "price_at_high": bar.price_at_high,
                "delta_price": bar.delta_price,
            }
            for bar in result.bars
        ],
    }


@app.post("/route", response_model=RouteEstimate)
def route(req: RouteRequest):
    """Resolve distance and traffic; falls back to great-circle distance."""
    client = DistanceMatrixClient.from_settings(get_settings())
    return resolve_route(req.origin, req.destination, client, req.departure_time)


def _prepare(req: RidePrepareRequest, ride_id: int | None = None) -> dict[str, Any]:
    policy = _build_policy(req.policy)
    breakdown = price_form(req.form, req.traffic_info, policy)
    try:
        if ride_id is None:
            payload = prepare_ride_payload(req.form, breakdown)
        else:
            payload = prepare_ride_update(ride_id, req.form, breakdown)
    except RideValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    logger.info("Prepared ride payload at %.2f %s per seat", payload.price_per_seat, policy.currency)
    return {"ride": payload.model_dump(mode="json"), "breakdown": breakdown.model_dump()}


@app.post("/rides/prepare")
def rides_prepare(req: RidePrepareRequest):
    """Validate a new ride and return the ``POST /rides`` body."""
    return _prepare(req)


@app.put("/rides/{ride_id}/prepare")
def rides_prepare_update(ride_id: int, req: RidePrepareRequest):
    """Validate an edited ride and return the ``PUT /rides/:id`` body."""
    return _prepare(req, ride_id)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    settings = get_settings()
    setup_logging(settings.log_level, settings.json_logs)
    uvicorn.run(
        "carpool_pricing.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
