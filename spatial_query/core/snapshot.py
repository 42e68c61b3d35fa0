"""Immutable snapshot of the world state for concurrent readers."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from spatial_query.core.models import Actor, Identity
from spatial_query.core.world_state import WorldState
from spatial_query.systems.spatial_hash import SpatialHashGrid


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the world, safe to share across threads.

    Holds copied actors behind a MappingProxyType and a private grid built
    over those copies, so the writer can keep mutating the live world while
    readers query the snapshot. Treat ``grid`` as read-only.
    """

    tick: int
    actors: Mapping[Identity, Actor]
    grid: SpatialHashGrid[Actor]

    @classmethod
    def from_world(cls, world: WorldState) -> Snapshot:
        # Copy in insertion order so equal-distance ties resolve as they do live.
        copied = {a.identity: a.copy() for a in world.spatial_index.get_all_ordered()}
        grid = SpatialHashGrid(copied.values(), world.spatial_index.cell_length)
        return cls(
            tick=world.tick,
            actors=MappingProxyType(copied),
            grid=grid,
        )

    def get(self, identity: Identity) -> Actor | None:
        return self.actors.get(identity)

    def __len__(self) -> int:
        return len(self.actors)
