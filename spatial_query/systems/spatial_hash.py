"""Spatial hash grid: O(1) cell lookups for actors on the X/Z plane.

Actors are bucketed by the cell containing their position. Proximity
queries look in the query cell and its 8 neighbors only, so the grid is
complete for queries whose radius is at most ``cell_length``. Pick the
cell length slightly larger than the typical query radius.

Two maps are kept in lockstep and only ever mutated through
``add_actor``, ``remove_actor*`` and ``try_update_actor_position``:

- ``_cells``       cell -> {identity: actor}  (non-empty buckets only)
- ``_actor_cells`` identity -> cell           (authoritative location cache)

Each actor also gets an insertion sequence number, the secondary sort key
that keeps equal-distance results in a repeatable order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Iterable, Iterator

from spatial_query.core.cells import Cell, cell_of, neighbor_cells
from spatial_query.core.models import AxisAlignedBoundingBox, Vector3
from spatial_query.systems.query_engine import SpatialQueryEngine, T
from spatial_query.systems.raycast import intersect_ray_aabb

if TYPE_CHECKING:
    from spatial_query.config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GridStats:
    """Occupancy summary of a grid at one moment."""

    cell_length: float
    actor_count: int
    bucket_count: int
    max_bucket_size: int
    mean_bucket_size: float


class SpatialHashGrid(SpatialQueryEngine[T]):
    """Grid-based spatial index mapping cells to the actors inside them."""

    __slots__ = ("_cell_length", "_cells", "_actor_cells", "_sequence", "_next_sequence")

    def __init__(self, actors: Iterable[T] = (), cell_length: float = 10.0) -> None:
        if not math.isfinite(cell_length) or cell_length <= 0:
            raise ValueError(f"cell_length must be a positive finite number, got {cell_length!r}")
        self._cell_length = float(cell_length)
        self._cells: dict[Cell, dict[Hashable, T]] = {}
        self._actor_cells: dict[Hashable, Cell] = {}
        self._sequence: dict[Hashable, int] = {}
        self._next_sequence = 0
        for actor in actors:
            self.add_actor(actor)

    @classmethod
    def from_config(cls, actors: Iterable[T], config: EngineConfig) -> SpatialHashGrid[T]:
        return cls(actors, config.cell_length)

    @property
    def cell_length(self) -> float:
        return self._cell_length

    def _key(self, pos: Vector3) -> Cell:
        return cell_of(pos, self._cell_length)

    # -- lifecycle --

    def add_actor(self, actor: T) -> None:
        """Insert *actor* into the cell containing its current position.

        Adding an identity that is already present replaces the old entry.
        """
        identity = actor.identity
        if identity in self._actor_cells:
            self._detach(identity)
        key = self._key(actor.position)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = self._cells[key] = {}
        bucket[identity] = actor
        self._actor_cells[identity] = key
        self._sequence[identity] = self._next_sequence
        self._next_sequence += 1
        logger.debug("Added %s to cell %s", identity, key)

    def remove_actor(self, actor: T) -> None:
        """Remove *actor*. Co-located actors are untouched; absent actors are ignored."""
        self.remove_actor_by_identity(actor.identity)

    def remove_actor_by_identity(self, identity: Hashable) -> T | None:
        """Remove the actor with *identity* and return it, or None if it was absent."""
        if identity not in self._actor_cells:
            return None
        actor, key = self._detach(identity)
        del self._sequence[identity]
        logger.debug("Removed %s from cell %s", identity, key)
        return actor

    def _detach(self, identity: Hashable) -> tuple[T, Cell]:
        key = self._actor_cells.pop(identity)
        bucket = self._cells[key]
        actor = bucket.pop(identity)
        if not bucket:
            del self._cells[key]
        return actor, key

    def try_update_actor_position(self, actor: T) -> bool:
        """Re-bucket *actor* if its live position moved it to another cell.

        Returns True if the actor changed cell. Returns False, without
        touching the grid, when the cell is unchanged or the actor is not
        in this grid.
        """
        identity = actor.identity
        current = self._actor_cells.get(identity)
        if current is None:
            logger.debug("Ignoring position update for unknown actor %s", identity)
            return False
        correct = self._key(actor.position)
        if current == correct:
            return False
        # Keep the existing sequence number so tie-break order survives moves.
        seq = self._sequence[identity]
        self._detach(identity)
        bucket = self._cells.get(correct)
        if bucket is None:
            bucket = self._cells[correct] = {}
        bucket[identity] = actor
        self._actor_cells[identity] = correct
        self._sequence[identity] = seq
        logger.debug("Moved %s from cell %s to %s", identity, current, correct)
        return True

    def clear(self) -> None:
        self._cells.clear()
        self._actor_cells.clear()
        self._sequence.clear()

    # -- lookup --

    def __len__(self) -> int:
        return len(self._actor_cells)

    def __contains__(self, item: object) -> bool:
        identity = getattr(item, "identity", item)
        try:
            return identity in self._actor_cells
        except TypeError:
            return False

    def __iter__(self) -> Iterator[T]:
        for bucket in self._cells.values():
            yield from bucket.values()

    def get_all(self) -> list[T]:
        return [actor for bucket in self._cells.values() for actor in bucket.values()]

    def get_all_ordered(self) -> list[T]:
        """Return all actors in insertion order, the order ties are broken in."""
        return sorted(self, key=lambda a: self._sequence[a.identity])

    def get_actor_from_identity(self, identity: Hashable) -> T | None:
        key = self._actor_cells.get(identity)
        if key is None:
            return None
        return self._cells[key].get(identity)

    def recorded_cell(self, identity: Hashable) -> Cell | None:
        """Return the cell the grid currently files *identity* under."""
        return self._actor_cells.get(identity)

    def occupied_cells(self) -> list[Cell]:
        return list(self._cells)

    def actors_in_cell(self, cell: Cell) -> list[T]:
        bucket = self._cells.get(cell)
        return list(bucket.values()) if bucket else []

    def stats(self) -> GridStats:
        sizes = [len(bucket) for bucket in self._cells.values()]
        return GridStats(
            cell_length=self._cell_length,
            actor_count=len(self._actor_cells),
            bucket_count=len(sizes),
            max_bucket_size=max(sizes, default=0),
            mean_bucket_size=(sum(sizes) / len(sizes)) if sizes else 0.0,
        )

    # -- neighborhood queries --

    def _iter_neighborhood(self, cell: Cell) -> Iterator[T]:
        for key in neighbor_cells(cell):
            bucket = self._cells.get(key)
            if bucket:
                yield from bucket.values()

    def get_actors_near(self, actor: T) -> list[T]:
        """Return every other actor in the 3x3 block of cells around *actor*.

        This is the "who is near me" query, e.g. deciding what to send to a
        client. The actor itself is never included.
        """
        identity = actor.identity
        return [
            other for other in self._iter_neighborhood(self._key(actor.position))
            if other.identity != identity
        ]

    def _iter_in_range(self, position: Vector3, radius: float) -> Iterator[T]:
        if radius < 0:
            return
        if radius > self._cell_length:
            logger.debug(
                "Query radius %.3f exceeds cell length %.3f; actors beyond one ring are not searched",
                radius, self._cell_length,
            )
        r2 = radius * radius
        for actor in self._iter_neighborhood(self._key(position)):
            if actor.position.distance_squared_to(position) <= r2:
                yield actor

    def get_in_range(self, position: Vector3, radius: float) -> list[T]:
        """Return actors in the 3x3 block within *radius* (3D distance, inclusive).

        Complete only when ``radius <= cell_length``.
        """
        return list(self._iter_in_range(position, radius))

    def count_in_range(self, position: Vector3, radius: float) -> int:
        count = 0
        for _ in self._iter_in_range(position, radius):
            count += 1
        return count

    def any_in_range(self, position: Vector3, radius: float) -> bool:
        for _ in self._iter_in_range(position, radius):
            return True
        return False

    def get_nearest(self, position: Vector3, max_range: float) -> T | None:
        best: T | None = None
        best_key: tuple[float, int] | None = None
        for actor in self._iter_in_range(position, max_range):
            key = (actor.position.distance_squared_to(position), self._sequence[actor.identity])
            if best_key is None or key < best_key:
                best, best_key = actor, key
        return best

    def get_nearest_many(self, position: Vector3, max_range: float, count: int) -> list[T]:
        if count <= 0:
            return []
        ranked = sorted(
            self._iter_in_range(position, max_range),
            key=lambda a: (a.position.distance_squared_to(position), self._sequence[a.identity]),
        )
        return ranked[:count]

    # -- region / ray queries --

    def get_inside(self, box: AxisAlignedBoundingBox) -> list[T]:
        # TODO: restrict the scan to cells overlapping the box's X/Z extent.
        return [actor for actor in self if box.contains(actor.position)]

    def raycast_all(self, origin: Vector3, direction: Vector3, max_distance: float) -> list[T]:
        """Return actors whose bounding box the ray hits within *max_distance*.

        Results are ordered by hit distance. An actor whose box contains the
        origin is hit at distance 0; actors behind the origin are never hit.
        Raises ValueError for a zero-length direction.
        """
        unit = direction.normalized()
        hits: list[tuple[float, int, T]] = []
        for actor in self:
            t = intersect_ray_aabb(origin, unit, actor.bounding_box)
            if t is not None and t <= max_distance:
                hits.append((t, self._sequence[actor.identity], actor))
        hits.sort(key=lambda h: (h[0], h[1]))
        return [actor for _, _, actor in hits]

    def __repr__(self) -> str:
        return f"SpatialHashGrid(cell_length={self._cell_length:g}, actors={len(self)}, cells={len(self._cells)})"
