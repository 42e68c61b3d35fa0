"""Pydantic export models for actors, grid occupancy and snapshots.

These describe query results and snapshots as plain data for whatever
consumes them (broadcast, inspection tooling, replay files). No transport
lives here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from spatial_query.core.cells import cell_of

if TYPE_CHECKING:
    from spatial_query.core.models import Actor, Vector3
    from spatial_query.core.snapshot import Snapshot
    from spatial_query.systems.spatial_hash import GridStats


class Vector3Schema(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class ActorSchema(BaseModel):
    id: str
    display_name: str
    kind: str
    position: Vector3Schema
    cell: tuple[int, int]
    description: str = ""


class GridStatsSchema(BaseModel):
    cell_length: float = Field(gt=0)
    actor_count: int = Field(0, ge=0)
    bucket_count: int = Field(0, ge=0)
    max_bucket_size: int = Field(0, ge=0)
    mean_bucket_size: float = Field(0.0, ge=0)


class SnapshotSchema(BaseModel):
    tick: int
    actors: list[ActorSchema] = Field(default_factory=list)
    stats: GridStatsSchema


# --- Conversion helpers ---

def vector_to_schema(v: Vector3) -> Vector3Schema:
    return Vector3Schema(x=v.x, y=v.y, z=v.z)


def actor_to_schema(actor: Actor, cell_length: float) -> ActorSchema:
    return ActorSchema(
        id=str(actor.identity.unique_id),
        display_name=actor.identity.display_name,
        kind=actor.kind.name.lower(),
        position=vector_to_schema(actor.position),
        cell=cell_of(actor.position, cell_length),
        description=actor.description,
    )


def stats_to_schema(stats: GridStats) -> GridStatsSchema:
    return GridStatsSchema(
        cell_length=stats.cell_length,
        actor_count=stats.actor_count,
        bucket_count=stats.bucket_count,
        max_bucket_size=stats.max_bucket_size,
        mean_bucket_size=stats.mean_bucket_size,
    )


def snapshot_to_schema(snapshot: Snapshot) -> SnapshotSchema:
    cell_length = snapshot.grid.cell_length
    return SnapshotSchema(
        tick=snapshot.tick,
        actors=[actor_to_schema(a, cell_length) for a in snapshot.grid.get_all_ordered()],
        stats=stats_to_schema(snapshot.grid.stats()),
    )
