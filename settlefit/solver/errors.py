"""Placement solver errors."""


class PlacementFailed(RuntimeError):
    """Every placement strategy, including the capped expanding search, failed."""

    def __init__(self, building_type: str, max_distance: float):
        self.building_type = building_type
        self.max_distance = max_distance
        super().__init__(
            f"No open location found for '{building_type}' within "
            f"{max_distance:g}m of any existing building"
        )
