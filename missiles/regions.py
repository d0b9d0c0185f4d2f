"""Region-permission service.

Regions are named volumes in a world that carry arbitrary named flags. The
missiles plugin only asks which regions apply at a block and whether one of
them carries a given flag name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

GLOBAL_REGION_ID = "__global__"


@dataclass
class ProtectedRegion:
    """Inclusive block cuboid with a flag mapping."""

    id: str
    min: tuple[int, int, int]
    max: tuple[int, int, int]
    flags: dict[str, Any] = field(default_factory=dict)
    priority: int = 0

    def __post_init__(self) -> None:
        lo = tuple(min(a, b) for a, b in zip(self.min, self.max))
        hi = tuple(max(a, b) for a, b in zip(self.min, self.max))
        self.min, self.max = lo, hi  # type: ignore[assignment]

    def contains(self, x: int, y: int, z: int) -> bool:
        return (
            self.min[0] <= x <= self.max[0]
            and self.min[1] <= y <= self.max[1]
            and self.min[2] <= z <= self.max[2]
        )


@dataclass
class GlobalRegion(ProtectedRegion):
    """Applies to every block in its world."""

    id: str = GLOBAL_REGION_ID
    min: tuple[int, int, int] = (0, 0, 0)
    max: tuple[int, int, int] = (0, 0, 0)

    def contains(self, x: int, y: int, z: int) -> bool:
        return True


class ApplicableRegionSet:
    """Regions covering a point, highest priority first."""

    def __init__(self, regions: list[ProtectedRegion]) -> None:
        self._regions = sorted(regions, key=lambda r: (-r.priority, r.id))

    def __iter__(self) -> Iterator[ProtectedRegion]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def ids(self) -> list[str]:
        return [r.id for r in self._regions]


class RegionManager:
    """Regions of a single world."""

    def __init__(self, world: str) -> None:
        self.world = world
        self._regions: dict[str, ProtectedRegion] = {}

    def add_region(self, region: ProtectedRegion) -> ProtectedRegion:
        self._regions[region.id.lower()] = region
        return region

    def remove_region(self, region_id: str) -> ProtectedRegion | None:
        return self._regions.pop(region_id.lower(), None)

    def get_region(self, region_id: str) -> ProtectedRegion | None:
        return self._regions.get(region_id.lower())

    @property
    def regions(self) -> list[ProtectedRegion]:
        return list(self._regions.values())

    def get_applicable_regions(self, point: tuple[int, int, int]) -> ApplicableRegionSet:
        x, y, z = point
        return ApplicableRegionSet([r for r in self._regions.values() if r.contains(x, y, z)])


class RegionContainer:
    """Per-world region managers. Worlds without a manager are unprotected."""

    def __init__(self) -> None:
        self._managers: dict[str, RegionManager] = {}

    def create(self, world: str) -> RegionManager:
        manager = self._managers.get(world)
        if manager is None:
            manager = self._managers[world] = RegionManager(world)
        return manager

    def get(self, world: str) -> RegionManager | None:
        return self._managers.get(world)
