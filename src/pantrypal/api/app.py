"""FastAPI application factory for the maps proxy server."""

import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from pantrypal.app_logging import configure_logging
from pantrypal.config import parse_allowed_origins
from pantrypal.containers import ProxyContainer


def create_app(container: ProxyContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/geocode", response_model=None)
    async def geocode(
        request: Request, address: str | None = None
    ) -> dict[str, object] | JSONResponse:
        """Pass an address through to Google geocoding."""
        if not address:
            return _error(400, "Address is required")
        state_container: ProxyContainer = request.app.state.container
        try:
            return await state_container.google_maps_client.geocode(address)
        except Exception:
            logger.exception("Geocoding error", extra={"address": address})
            return _error(500, "Failed to geocode address")

    @app.get("/api/foodbanks", response_model=None)
    async def food_banks(
        request: Request, lat: str | None = None, lng: str | None = None
    ) -> dict[str, object] | JSONResponse:
        """Return synthetic food banks near a point, nearest first."""
        if not lat or not lng:
            return _error(400, "Latitude and longitude are required")
        latitude = _parse_float(lat)
        longitude = _parse_float(lng)
        if latitude is None or longitude is None:
            return _error(400, "Invalid coordinates")
        state_container: ProxyContainer = request.app.state.container
        try:
            results = state_container.food_bank_search.search(latitude, longitude)
        except Exception:
            logger.exception("Food banks search error")
            return _error(500, "Failed to search food banks")
        logger.info("Generated %s food banks near %s,%s", len(results), lat, lng)
        return {
            "status": "OK",
            "results": [food_bank.to_payload() for food_bank in results],
        }

    @app.get("/api/staticmap", response_model=None)
    async def static_map(
        request: Request, lat: str | None = None, lng: str | None = None
    ) -> Response:
        """Return a Mapbox PNG with a pin at the point."""
        if not lat or not lng:
            return _error(400, "Latitude and longitude are required")
        if _parse_float(lat) is None or _parse_float(lng) is None:
            return _error(400, "Invalid coordinates")
        state_container: ProxyContainer = request.app.state.container
        try:
            image = await state_container.mapbox_client.static_map(lat, lng)
        except Exception:
            logger.exception("Static map error")
            return _error(500, "Failed to generate map")
        return Response(content=image, media_type="image/png")

    @app.get("/api/directions", response_model=None)
    async def directions(
        request: Request,
        start_lat: str | None = Query(default=None, alias="startLat"),
        start_lng: str | None = Query(default=None, alias="startLng"),
        end_lat: str | None = Query(default=None, alias="endLat"),
        end_lng: str | None = Query(default=None, alias="endLng"),
    ) -> dict[str, object] | JSONResponse:
        """Summarize the driving route between two points."""
        if not (start_lat and start_lng and end_lat and end_lng):
            return _error(400, "Start and end coordinates are required")
        state_container: ProxyContainer = request.app.state.container
        try:
            route = await state_container.directions_service.get_route(
                (start_lat, start_lng), (end_lat, end_lng)
            )
        except Exception:
            logger.exception("Directions error")
            return _error(500, "Failed to fetch directions")
        if route is None:
            return _error(400, "No route found")
        return {"route": route.to_payload()}

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_float(raw: str) -> float | None:
    """Parse a query coordinate, rejecting non-finite values."""
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
