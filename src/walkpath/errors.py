"""Error types raised by the path generation core."""


class GeometryParseError(ValueError):
    """A place's geometry is not a recognised point encoding."""

    def __init__(self, place_id: str, geometry: object, reason: str = ""):
        self.place_id = place_id
        self.geometry = geometry
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Could not extract coordinates from place {place_id} ({geometry!r}){detail}"
        )


class InvalidSpeedError(ValueError):
    """Walking speed must be strictly positive."""

    def __init__(self, speed_kmh: float):
        self.speed_kmh = speed_kmh
        super().__init__(f"Walking speed must be positive, got {speed_kmh} km/h")


class InsufficientBudgetError(ValueError):
    """Dwell time plus buffer already exceeds the total time budget."""

    def __init__(self, total_budget_minutes: float, minimum_required_minutes: float, place_count: int):
        self.total_budget_minutes = total_budget_minutes
        self.minimum_required_minutes = minimum_required_minutes
        self.place_count = place_count
        super().__init__(
            f"Insufficient time: need at least {minimum_required_minutes:g} minutes "
            f"for {place_count} places, got {total_budget_minutes:g}"
        )


class InsufficientCandidatesError(ValueError):
    """Candidate preselection could not find enough places for a route."""


class RoutingServiceError(RuntimeError):
    """The external pedestrian-routing service failed or returned no route."""
