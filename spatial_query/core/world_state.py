"""Mutable authoritative world state. Owns the actors and keeps the grid in sync."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spatial_query.core.models import Actor, Identity, Vector3

if TYPE_CHECKING:
    from spatial_query.systems.spatial_hash import SpatialHashGrid

logger = logging.getLogger(__name__)


class WorldState:
    """The single source of truth for actors and their positions.

    The grid only holds references; every add, remove and move goes
    through here so the grid always reflects the actor collection.
    """

    __slots__ = ("tick", "actors", "spatial_index")

    def __init__(self, spatial_index: SpatialHashGrid[Actor]) -> None:
        self.tick: int = 0
        self.actors: dict[Identity, Actor] = {}
        self.spatial_index: SpatialHashGrid[Actor] = spatial_index
        for actor in spatial_index.get_all_ordered():
            self.actors[actor.identity] = actor

    def add_actor(self, actor: Actor) -> None:
        self.actors[actor.identity] = actor
        self.spatial_index.add_actor(actor)

    def remove_actor(self, identity: Identity) -> Actor | None:
        actor = self.actors.pop(identity, None)
        if actor is not None:
            self.spatial_index.remove_actor_by_identity(identity)
        return actor

    def move_actor(self, identity: Identity, new_pos: Vector3) -> bool:
        """Move an actor; returns True if it crossed into another cell."""
        actor = self.actors.get(identity)
        if actor is None:
            return False
        actor.move_to(new_pos)
        return self.spatial_index.try_update_actor_position(actor)

    def get(self, identity: Identity) -> Actor | None:
        return self.actors.get(identity)

    def advance_tick(self) -> int:
        self.tick += 1
        logger.debug("Tick %d: %d actors in %d cells", self.tick, len(self.actors), len(self.spatial_index.occupied_cells()))
        return self.tick
