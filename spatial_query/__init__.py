"""Spatial query engine: locate actors on the X/Z plane and answer proximity queries."""

from spatial_query.config import EngineConfig
from spatial_query.core import Actor, ActorKind, AxisAlignedBoundingBox, Identity, Vector3, WorldState, cell_of
from spatial_query.systems import SpatialHashGrid, SpatialQueryEngine
from spatial_query.core.snapshot import Snapshot

__all__ = [
    "Actor",
    "ActorKind",
    "AxisAlignedBoundingBox",
    "EngineConfig",
    "Identity",
    "Snapshot",
    "SpatialHashGrid",
    "SpatialQueryEngine",
    "Vector3",
    "WorldState",
    "cell_of",
]
