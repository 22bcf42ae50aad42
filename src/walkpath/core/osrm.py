"""Pedestrian routing via an OSRM server."""

import logging

import httpx

from walkpath.errors import RoutingServiceError
from walkpath.models import Coordinate
from .models import RouteGeometry, RouteLeg

logger = logging.getLogger(__name__)

DEFAULT_OSRM_URL = "http://localhost:5000"


class OsrmRouteProvider:
    """Async route provider backed by the OSRM HTTP API.

    Unlike GreatCircleRouteProvider this performs network I/O, so every
    call is a coroutine.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OSRM_URL,
        profile: str = "foot",
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout

    def _route_url(self, coords: list[Coordinate]) -> str:
        waypoints = ";".join(f"{c.longitude},{c.latitude}" for c in coords)
        return f"{self.base_url}/route/v1/{self.profile}/{waypoints}"

    async def route(self, coords: list[Coordinate]) -> RouteGeometry:
        """Route through all coordinates in order."""
        if len(coords) < 2:
            raise ValueError("At least 2 coordinates are required")

        url = self._route_url(coords)
        params = {"overview": "full", "geometries": "geojson", "steps": "false"}
        logger.info("Requesting OSRM route through %d waypoints", len(coords))

        async with httpx.AsyncClient(
            timeout=self.timeout, headers={"User-Agent": "walkpath/1.0"}
        ) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as exc:
                logger.warning("OSRM request to %s timed out: %s", self.base_url, exc)
                raise RoutingServiceError("Route calculation timed out") from exc
            except httpx.HTTPStatusError as exc:
                logger.warning("OSRM server %s returned HTTP %s", self.base_url, exc.response.status_code)
                raise RoutingServiceError(
                    f"OSRM service error: HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("OSRM server %s failed: %s", self.base_url, exc)
                raise RoutingServiceError(
                    "Failed to calculate route. OSRM service may be starting up."
                ) from exc

        routes = data.get("routes") or []
        if data.get("code") != "Ok" or not routes:
            logger.warning("OSRM returned no routes. Response code: %s", data.get("code"))
            raise RoutingServiceError("No route found between these points")

        best = routes[0]
        geometry = best.get("geometry") or {}
        route = RouteGeometry(
            coordinates=geometry.get("coordinates", []),
            distance_km=best.get("distance", 0.0) / 1000,
            duration_minutes=best.get("duration", 0.0) / 60,
            legs=[
                RouteLeg(
                    distance_km=leg.get("distance", 0.0) / 1000,
                    duration_minutes=leg.get("duration", 0.0) / 60,
                )
                for leg in best.get("legs", [])
            ],
        )
        logger.info(
            "Route calculated: %.2f km, %.0f min", route.distance_km, route.duration_minutes
        )
        return route

    async def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        route = await self.route([a, b])
        return route.distance_km

    async def health_check(self) -> bool:
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except httpx.HTTPError as exc:
            logger.warning("OSRM health check failed: %s", exc)
            return False
