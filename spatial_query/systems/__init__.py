"""Engine systems: spatial indexing, ray tests, RNG, actor scatter."""

from spatial_query.systems.query_engine import SpatialQueryEngine
from spatial_query.systems.raycast import intersect_ray_aabb
from spatial_query.systems.spatial_hash import GridStats, SpatialHashGrid
from spatial_query.systems.rng import DeterministicRNG
from spatial_query.systems.scatter import ActorScatter

__all__ = [
    "ActorScatter",
    "DeterministicRNG",
    "GridStats",
    "SpatialHashGrid",
    "SpatialQueryEngine",
    "intersect_ray_aabb",
]
