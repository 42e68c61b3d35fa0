"""Abstract spatial query contract.

Subclass SpatialQueryEngine and implement the five abstract queries.
``raycast``, ``count_in_range`` and ``any_in_range`` come for free and may
be overridden with faster versions.

Callers (rendering, AI, broadcast) should depend on this class rather than
on a particular index, so a quadtree or k-d tree can replace the hash grid
without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

from spatial_query.core.models import AxisAlignedBoundingBox, Locatable, Vector3

T = TypeVar("T", bound=Locatable)


class SpatialQueryEngine(ABC, Generic[T]):
    """Read-only proximity queries over a set of actors."""

    @abstractmethod
    def get_inside(self, box: AxisAlignedBoundingBox) -> list[T]:
        """Return every actor whose position lies inside *box* (boundary inclusive)."""

    @abstractmethod
    def get_in_range(self, position: Vector3, radius: float) -> Iterable[T]:
        """Return every actor within *radius* of *position* (boundary inclusive)."""

    @abstractmethod
    def get_nearest(self, position: Vector3, max_range: float) -> T | None:
        """Return the single nearest actor within *max_range*, or None."""

    @abstractmethod
    def get_nearest_many(self, position: Vector3, max_range: float, count: int) -> list[T]:
        """Return up to *count* actors within *max_range*, nearest first."""

    @abstractmethod
    def raycast_all(self, origin: Vector3, direction: Vector3, max_distance: float) -> list[T]:
        """Return every actor whose bounding box the ray hits, nearest hit first."""

    # -- derived --

    def raycast(self, origin: Vector3, direction: Vector3, max_distance: float) -> T | None:
        hits = self.raycast_all(origin, direction, max_distance)
        return hits[0] if hits else None

    def count_in_range(self, position: Vector3, radius: float) -> int:
        return sum(1 for _ in self.get_in_range(position, radius))

    def any_in_range(self, position: Vector3, radius: float) -> bool:
        return any(True for _ in self.get_in_range(position, radius))
