"""Session state for the walkpath MCP server.

Holds the candidate place pool, generation constraints, routing
configuration and the most recently generated path.
"""

from typing import Optional

from pydantic import BaseModel, Field

from walkpath.core.models import GeneratedPath, GenerationConstraints, RoutingConfig
from walkpath.models import Place


class SessionState(BaseModel):
    places: list[Place] = []
    constraints: GenerationConstraints = Field(default_factory=GenerationConstraints)
    config: RoutingConfig = Field(default_factory=RoutingConfig)
    path: Optional[GeneratedPath] = None

    def find_place(self, place_id: str) -> Optional[Place]:
        return next((p for p in self.places if p.id == place_id), None)

    def clear_path(self) -> None:
        self.path = None

    def summary(self) -> dict:
        c = self.constraints
        return {
            "places": {
                "count": len(self.places),
                "ids": [p.id for p in self.places],
            },
            "constraints": c.model_dump(),
            "config": self.config.model_dump(),
            "path": {
                "generated": True,
                "stops": self.path.place_ids,
                "total_distance_km": round(self.path.total_distance_km, 3),
                "total_time_minutes": self.path.total_time_minutes,
                "circular": self.path.is_circular,
                "routed": self.path.geometry is not None,
            } if self.path else {"generated": False},
        }


# Global session state, one per MCP server process
state = SessionState()
