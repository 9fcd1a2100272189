"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_ENV_CONFIG = SettingsConfigDict(
    env_file=(f".env.{_ENVIRONMENT}", ".env"),
    extra="ignore",
)


class ClientSettings(BaseSettings):
    """Settings for the app core talking to Supabase and the proxy."""

    supabase_url: str
    supabase_anon_key: str
    proxy_base_url: str = "http://localhost:3000"
    http_timeout_seconds: float = 10
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    location_permission_granted: bool = True
    device_latitude: float | None = None
    device_longitude: float | None = None
    environment: str = _ENVIRONMENT

    model_config = _ENV_CONFIG


class ProxySettings(BaseSettings):
    """Settings for the maps proxy server."""

    google_places_api_key: str
    mapbox_token: str
    google_maps_base_url: str = "https://maps.googleapis.com/maps/api"
    mapbox_base_url: str = "https://api.mapbox.com"
    port: int = 3000
    eta_timezone: str = "UTC"
    cors_allow_origins: str = "*"
    environment: str = _ENVIRONMENT

    model_config = _ENV_CONFIG


def parse_allowed_origins(raw: str) -> list[str]:
    """Parse a comma separated CORS origin list; ``*`` allows any."""
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    return [origin.strip() for origin in cleaned.split(",") if origin.strip()]
