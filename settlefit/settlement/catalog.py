"""In-memory building type catalog."""

import logging
from pathlib import Path

from ..models.buildings import BuildingSpec, Capability

logger = logging.getLogger(__name__)


class StaticBuildingCatalog:
    """Building type metadata held in memory.

    Raises KeyError for unknown building types.
    """

    def __init__(self, specs: list[BuildingSpec]):
        self._specs = {spec.name: spec for spec in specs}

    def __contains__(self, building_type: str) -> bool:
        return building_type in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def get(self, building_type: str) -> BuildingSpec:
        """Get the catalog entry for a type."""
        try:
            return self._specs[building_type]
        except KeyError:
            raise KeyError(f"Unknown building type '{building_type}'") from None

    @property
    def types(self) -> list[str]:
        return sorted(self._specs)

    def width(self, building_type: str) -> float:
        return self.get(building_type).width

    def length(self, building_type: str) -> float:
        return self.get(building_type).length

    def capabilities(self, building_type: str) -> frozenset[Capability]:
        return self.get(building_type).capabilities

    def has_connection(self, building_type: str) -> bool:
        return Capability.CONNECTION in self.capabilities(building_type)

    def has_life_support(self, building_type: str) -> bool:
        return Capability.LIFE_SUPPORT in self.capabilities(building_type)

    def connector_width(self, building_type: str) -> float:
        """Catalog width of a connector type (<= 0 when variable)."""
        return self.get(building_type).width

    @classmethod
    def from_dict(cls, data: dict[str, dict]) -> "StaticBuildingCatalog":
        """Build from a mapping of type name to {width, length, capabilities}."""
        specs = [BuildingSpec(name=name, **fields) for name, fields in data.items()]
        return cls(specs)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "StaticBuildingCatalog":
        """Load catalog from YAML string (same layout as ``from_dict``)."""
        import yaml
        data = yaml.safe_load(yaml_content) or {}
        return cls.from_dict(data.get("building_types", data))

    @classmethod
    def from_file(cls, path: Path | str) -> "StaticBuildingCatalog":
        """Load catalog from a YAML file."""
        with open(path) as f:
            catalog = cls.from_yaml(f.read())
        logger.debug(f"Loaded {len(catalog)} building types from {path}")
        return catalog
