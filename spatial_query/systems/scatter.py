"""Actor scatter: deterministic population of a world with trees."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spatial_query.core.enums import TREE_KINDS, ActorKind, Domain
from spatial_query.core.models import Actor, Vector3

if TYPE_CHECKING:
    from spatial_query.config import EngineConfig
    from spatial_query.core.world_state import WorldState
    from spatial_query.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_KIND_DESCRIPTIONS: dict[ActorKind, str] = {
    ActorKind.BIRCH_TREE: "A slender birch with papery white bark.",
    ActorKind.OAK_TREE: "A broad oak, old and sturdy.",
    ActorKind.WILLOW_TREE: "A willow, branches trailing to the ground.",
}

# Bounding box half-size per kind as multiples of config.default_actor_extent: (x/z, y)
_KIND_EXTENT_SCALE: dict[ActorKind, tuple[float, float]] = {
    ActorKind.BIRCH_TREE: (0.8, 6.0),
    ActorKind.OAK_TREE: (1.6, 5.0),
    ActorKind.WILLOW_TREE: (2.0, 4.0),
}


class ActorScatter:
    """Places trees at reproducible positions inside a square area.

    Each scattered tree takes the next index from a counter owned by the
    scatter, so indices are never reused even after trees are removed
    from the world.
    """

    __slots__ = ("_config", "_rng", "_next_index")

    def __init__(self, config: EngineConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._next_index: int = 0

    @property
    def next_index(self) -> int:
        return self._next_index

    def make_actor(self, index: int, area: float | None = None) -> Actor:
        """Build the *index*-th tree; same seed and index give the same tree."""
        half = (area if area is not None else self._config.scatter_area) / 2.0
        jitter = self._config.scatter_height_jitter
        x = self._rng.next_range(Domain.SCATTER_X, index, -half, half)
        z = self._rng.next_range(Domain.SCATTER_Z, index, -half, half)
        y = self._rng.next_range(Domain.SCATTER_Y, index, -jitter, jitter) if jitter > 0 else 0.0
        kind = TREE_KINDS[self._rng.next_int(Domain.SCATTER_KIND, index, 0, len(TREE_KINDS) - 1)]
        base = self._config.default_actor_extent
        radial, vertical = _KIND_EXTENT_SCALE[kind]
        return Actor.create(
            f"{kind.name.title().replace('_', '')} #{index}",
            Vector3(x, y, z),
            kind=kind,
            extents=Vector3(base * radial, base * vertical, base * radial),
            description=_KIND_DESCRIPTIONS[kind],
        )

    def scatter(self, world: WorldState, count: int, area: float | None = None) -> list[Actor]:
        """Add *count* trees to *world* and return them."""
        start = self._next_index
        placed = [self.make_actor(start + i, area) for i in range(count)]
        self._next_index += len(placed)
        for actor in placed:
            world.add_actor(actor)
        logger.info("Scattered %d trees (seed=%d, next index %d)", count, self._rng.seed, self._next_index)
        return placed
