"""Tests for the SpatialQueryEngine contract and its derived defaults.

A brute-force engine implements only the five abstract queries; the
derived ``raycast``/``count_in_range``/``any_in_range`` must work on top of
it, and its answers must agree with the hash grid for radii within one cell.
"""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from spatial_query.core.models import Actor, AxisAlignedBoundingBox, Vector3
from spatial_query.systems.query_engine import SpatialQueryEngine
from spatial_query.systems.raycast import intersect_ray_aabb
from spatial_query.systems.spatial_hash import SpatialHashGrid
from tests.helpers.arena import make_tree


class BruteForceEngine(SpatialQueryEngine[Actor]):
    """Scans every actor for every query."""

    def __init__(self, actors: list[Actor]) -> None:
        self._actors = list(actors)

    def get_inside(self, box: AxisAlignedBoundingBox) -> list[Actor]:
        return [a for a in self._actors if box.contains(a.position)]

    def get_in_range(self, position: Vector3, radius: float) -> list[Actor]:
        return [a for a in self._actors if a.position.distance_to(position) <= radius]

    def get_nearest(self, position: Vector3, max_range: float) -> Actor | None:
        found = self.get_nearest_many(position, max_range, 1)
        return found[0] if found else None

    def get_nearest_many(self, position: Vector3, max_range: float, count: int) -> list[Actor]:
        ranked = sorted(self.get_in_range(position, max_range), key=lambda a: a.position.distance_to(position))
        return ranked[:max(count, 0)]

    def raycast_all(self, origin: Vector3, direction: Vector3, max_distance: float) -> list[Actor]:
        unit = direction.normalized()
        hits = []
        for a in self._actors:
            t = intersect_ray_aabb(origin, unit, a.bounding_box)
            if t is not None and t <= max_distance:
                hits.append((t, a))
        hits.sort(key=lambda h: h[0])
        return [a for _, a in hits]


def _population() -> list[Actor]:
    return [make_tree(f"T{i}", (i * 3.7) % 30 - 15, (i * 5.3) % 30 - 15, y=(i % 3) - 1) for i in range(60)]


class TestContract:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            SpatialQueryEngine()

    def test_partial_implementation_is_abstract(self):
        class OnlyInside(SpatialQueryEngine):
            def get_inside(self, box):
                return []

        with pytest.raises(TypeError):
            OnlyInside()

    def test_hash_grid_is_an_engine(self):
        assert isinstance(SpatialHashGrid([], 1.0), SpatialQueryEngine)


class TestDerivedDefaults:
    def test_raycast_default(self):
        near = make_tree("Near", 2, 0)
        far = make_tree("Far", 6, 0)
        engine = BruteForceEngine([far, near])
        assert engine.raycast(Vector3.zero(), Vector3.unit_x(), 10.0) is near
        assert engine.raycast(Vector3.zero(), -Vector3.unit_x(), 10.0) is None

    def test_count_and_any_default(self):
        engine = BruteForceEngine([make_tree("A", 1, 0), make_tree("B", 2, 0), make_tree("C", 40, 0)])
        assert engine.count_in_range(Vector3.zero(), 5.0) == 2
        assert engine.any_in_range(Vector3.zero(), 5.0) is True
        assert engine.any_in_range(Vector3(100, 0, 100), 5.0) is False


class TestGridAgreesWithBruteForce:
    @pytest.mark.parametrize("radius", [1.0, 4.0, 10.0])
    def test_in_range(self, radius):
        actors = _population()
        grid = SpatialHashGrid(actors, 10.0)
        brute = BruteForceEngine(actors)
        for probe in (Vector3.zero(), Vector3(-7, 0, 3), Vector3(12, 1, -12)):
            assert set(grid.get_in_range(probe, radius)) == set(brute.get_in_range(probe, radius))
            assert grid.count_in_range(probe, radius) == brute.count_in_range(probe, radius)

    def test_inside(self):
        actors = _population()
        box = AxisAlignedBoundingBox(Vector3(-8, -1, -4), Vector3(6, 1, 9))
        assert set(SpatialHashGrid(actors, 10.0).get_inside(box)) == set(BruteForceEngine(actors).get_inside(box))

    def test_raycast_all(self):
        actors = _population()
        grid = SpatialHashGrid(actors, 10.0)
        brute = BruteForceEngine(actors)
        origin = Vector3(-15, 0, -15)
        direction = Vector3(1, 0, 1)
        assert grid.raycast_all(origin, direction, 50.0) == brute.raycast_all(origin, direction, 50.0)
