"""Service settings, read from ``CARPOOL_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """Runtime settings for the pricing API and its route provider."""

    log_level: str = Field(default="INFO", description="Root log level")
    json_logs: bool = Field(default=False, description="Emit one JSON object per log line")

    distance_matrix_url: str = Field(
        default="https://maps.googleapis.com/maps/api/distancematrix/json",
        description="Distance Matrix endpoint",
    )
    google_maps_api_key: str = Field(
        default="",
        description="API key for the Distance Matrix service. Empty = haversine only.",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP timeout for route lookups")

    timezone: str | None = Field(
        default=None,
        description="Default IANA zone applied to the pricing policy when none is given",
    )

    model_config = SettingsConfigDict(env_prefix="CARPOOL_")
