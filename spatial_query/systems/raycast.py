"""Ray versus axis-aligned box intersection (slab method)."""

from __future__ import annotations

import math

from spatial_query.core.models import AxisAlignedBoundingBox, Vector3

_PARALLEL_EPSILON = 1e-12


def intersect_ray_aabb(
    origin: Vector3,
    direction: Vector3,
    box: AxisAlignedBoundingBox,
) -> float | None:
    """Return the distance along the ray at which it enters *box*.

    *direction* is expected to be unit length, so the result is in world
    units. A ray starting inside the box hits at ``0.0``. Returns ``None``
    when the ray misses or the box lies entirely behind the origin.
    """
    t_near = -math.inf
    t_far = math.inf

    for o, d, lo, hi in (
        (origin.x, direction.x, box.min.x, box.max.x),
        (origin.y, direction.y, box.min.y, box.max.y),
        (origin.z, direction.z, box.min.z, box.max.z),
    ):
        if abs(d) < _PARALLEL_EPSILON:
            # Parallel to this slab: either always inside it or never.
            if o < lo or o > hi:
                return None
            continue
        inv = 1.0 / d
        t1 = (lo - o) * inv
        t2 = (hi - o) * inv
        if t1 > t2:
            t1, t2 = t2, t1
        if t1 > t_near:
            t_near = t1
        if t2 < t_far:
            t_far = t2
        if t_near > t_far:
            return None

    if t_far < 0.0:
        return None
    return max(t_near, 0.0)
