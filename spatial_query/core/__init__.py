"""Core data models and world representation."""

from spatial_query.core.enums import ActorKind, Domain
from spatial_query.core.models import Actor, AxisAlignedBoundingBox, Identity, Locatable, UniqueId, Vector3
from spatial_query.core.cells import Cell, cell_of, neighbor_cells
from spatial_query.core.world_state import WorldState

__all__ = [
    "Actor",
    "ActorKind",
    "AxisAlignedBoundingBox",
    "Cell",
    "Domain",
    "Identity",
    "Locatable",
    "UniqueId",
    "Vector3",
    "WorldState",
    "cell_of",
    "neighbor_cells",
]
