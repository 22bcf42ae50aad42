"""Pydantic domain models for candidate places and their geometry."""

from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator


class Coordinate(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class PointGeometry(BaseModel):
    """GeoJSON-style point. Longitude comes first."""
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(min_length=2, max_length=2)

    @classmethod
    def from_coordinate(cls, coord: Coordinate) -> "PointGeometry":
        return cls(coordinates=[coord.longitude, coord.latitude])


class Place(BaseModel):
    """A candidate point of interest supplied by the surrounding system.

    ``coordinates`` is kept in its raw encoding (WKT string or point object)
    and only parsed when a route is computed, so that a parse failure can
    name the offending place.
    """
    id: str = Field(min_length=1)
    name: str = ""
    coordinates: Union[PointGeometry, str, dict]

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Place id must not be blank")
        return v

    @property
    def label(self) -> str:
        return self.name or self.id
