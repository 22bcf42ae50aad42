"""Pydantic models for routing configuration and computed path results."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from walkpath.models import Coordinate, Place

_TOTAL_TOLERANCE = 1e-6


class RoutingConfig(BaseModel):
    """Tunable constants for distance, travel time and budget arithmetic."""
    model_config = ConfigDict(validate_assignment=True)

    earth_radius_km: float = Field(default=6371.0, gt=0)
    pedestrian_factor: float = Field(default=1.15, ge=1.0)
    plain_speed_kmh: float = Field(default=5.0, gt=0)
    sightseeing_speed_kmh: float = Field(default=4.0, gt=0)
    default_dwell_minutes: float = Field(default=15.0, ge=0)
    buffer_minutes: float = Field(default=15.0, ge=0)
    max_place_count: int = Field(default=20, ge=0)


class GenerationConstraints(BaseModel):
    """Caller-supplied anchors and budget for one generation request."""
    model_config = ConfigDict(validate_assignment=True)

    start_place_id: Optional[str] = None
    end_place_id: Optional[str] = None
    max_duration_minutes: Optional[float] = Field(default=None, gt=0)
    max_distance_km: Optional[float] = Field(default=None, gt=0)
    walking_speed_kmh: Optional[float] = Field(default=None, gt=0)
    dwell_minutes_per_place: Optional[float] = Field(default=None, ge=0)
    max_places: Optional[int] = Field(default=None, ge=2)
    start_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    start_longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    is_circular: bool = False

    @property
    def has_budget(self) -> bool:
        return self.max_duration_minutes is not None or self.max_distance_km is not None

    @property
    def start_coordinate(self) -> Optional[Coordinate]:
        """Free start point, set only when both latitude and longitude are given."""
        if self.start_latitude is None or self.start_longitude is None:
            return None
        return Coordinate(latitude=self.start_latitude, longitude=self.start_longitude)


class Segment(BaseModel):
    from_place_id: str
    to_place_id: str
    distance_km: float = Field(ge=0)
    travel_time_minutes: int = Field(ge=0)


class PathMetrics(BaseModel):
    """Return type for aggregate()."""
    segments: list[Segment] = []
    total_distance_km: float = Field(default=0.0, ge=0)
    total_time_minutes: float = Field(default=0.0, ge=0)


class Stop(BaseModel):
    place_id: str
    order: int = Field(ge=0)
    dwell_time_minutes: float = Field(ge=0)
    distance_from_previous: float = Field(default=0.0, ge=0)
    travel_time_from_previous: int = Field(default=0, ge=0)


class RouteLeg(BaseModel):
    distance_km: float = Field(ge=0)
    duration_minutes: float = Field(ge=0)


class RouteGeometry(BaseModel):
    """Route returned by an external pedestrian-routing service."""
    type: Literal["LineString"] = "LineString"
    coordinates: list[list[float]] = Field(default_factory=list)
    distance_km: float = Field(default=0.0, ge=0)
    duration_minutes: float = Field(default=0.0, ge=0)
    legs: list[RouteLeg] = Field(default_factory=list)

    @field_validator("coordinates")
    @classmethod
    def positions_must_be_lon_lat(cls, v: list[list[float]]) -> list[list[float]]:
        for i, pos in enumerate(v):
            if len(pos) < 2:
                raise ValueError(f"Position {i} must have at least 2 components, got {len(pos)}")
        return v


class GeneratedPath(BaseModel):
    """Ordered stops plus totals for one generation request."""
    stops: list[Stop] = []
    total_distance_km: float = Field(default=0.0, ge=0)
    total_time_minutes: float = Field(default=0.0, ge=0)
    geometry: Optional[RouteGeometry] = None

    @model_validator(mode="after")
    def orders_must_be_contiguous(self) -> "GeneratedPath":
        for i, stop in enumerate(self.stops):
            if stop.order != i:
                raise ValueError(f"Stop {i} has order {stop.order}, expected {i}")
        return self

    @model_validator(mode="after")
    def first_stop_has_no_inbound_segment(self) -> "GeneratedPath":
        if self.stops:
            first = self.stops[0]
            if first.distance_from_previous != 0 or first.travel_time_from_previous != 0:
                raise ValueError("First stop must have zero distance and travel time from previous")
        return self

    @model_validator(mode="after")
    def totals_must_match_stops(self) -> "GeneratedPath":
        distance = sum(s.distance_from_previous for s in self.stops)
        time = sum(s.travel_time_from_previous + s.dwell_time_minutes for s in self.stops)
        if abs(distance - self.total_distance_km) > _TOTAL_TOLERANCE:
            raise ValueError(
                f"total_distance_km {self.total_distance_km} does not match stops ({distance})"
            )
        if abs(time - self.total_time_minutes) > _TOTAL_TOLERANCE:
            raise ValueError(
                f"total_time_minutes {self.total_time_minutes} does not match stops ({time})"
            )
        return self

    @property
    def place_ids(self) -> list[str]:
        return [s.place_id for s in self.stops]

    @property
    def is_circular(self) -> bool:
        return len(self.stops) > 1 and self.stops[0].place_id == self.stops[-1].place_id

    @property
    def walking_time_minutes(self) -> int:
        return sum(s.travel_time_from_previous for s in self.stops)


class TimeBreakdown(BaseModel):
    """Return type for time_breakdown()."""
    walking_time_minutes: int = Field(ge=0)
    dwell_time_minutes: float = Field(ge=0)
    buffer_minutes: float = Field(ge=0)
    total_time_minutes: float = Field(ge=0)


class TrimResult(BaseModel):
    """Return type for trim_to_budget()."""
    sequence: list[Place]
    metrics: PathMetrics
    removed_place_ids: list[str] = []
    satisfied: bool = True
