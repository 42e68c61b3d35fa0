"""Tests for core models: Vector3, UniqueId/Identity, bounding boxes, Actor."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import uuid

import pytest

from spatial_query.core.enums import ActorKind
from spatial_query.core.models import (
    Actor,
    AxisAlignedBoundingBox,
    Identity,
    Locatable,
    UniqueId,
    Vector3,
)


class TestVector3:
    def test_arithmetic(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert b / 2 == Vector3(2, 2.5, 3)
        assert -a == Vector3(-1, -2, -3)

    def test_lengths(self):
        v = Vector3(3, 4, 0)
        assert v.length_squared() == 25
        assert v.length() == 5
        assert v.normalized() == Vector3(0.6, 0.8, 0)

    def test_normalize_zero_raises(self):
        with pytest.raises(ValueError):
            Vector3.zero().normalized()

    def test_distance_uses_all_three_axes(self):
        assert Vector3(0, 0, 0).distance_to(Vector3(2, 3, 6)) == 7
        assert Vector3(1, 1, 1).distance_squared_to(Vector3(2, 2, 2)) == 3

    def test_min_max(self):
        a = Vector3(1, 5, -2)
        b = Vector3(3, 0, -4)
        assert a.min(b) == Vector3(1, 0, -4)
        assert a.max(b) == Vector3(3, 5, -2)

    def test_immutable(self):
        v = Vector3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 9


class TestIdentity:
    def test_unique_id_string_round_trip(self):
        uid = UniqueId.new("tree")
        assert str(uid).startswith("tree-")
        assert UniqueId.from_string(str(uid)) == uid

    def test_from_string_keeps_uuid_dashes(self):
        guid = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert UniqueId.from_string(f"oak-{guid}") == UniqueId("oak", guid)

    def test_new_identities_are_distinct(self):
        a = Identity.new("tree", "Same")
        b = Identity.new("tree", "Same")
        assert a != b
        assert len({a, b}) == 2

    def test_identities_are_ordered(self):
        ids = [Identity.new("tree", name) for name in ("c", "a", "b")]
        assert [i.display_name for i in sorted(ids)] == ["a", "b", "c"]


class TestBoundingBox:
    def test_derived_properties(self):
        box = AxisAlignedBoundingBox(Vector3(0, 0, 0), Vector3(4, 2, 6))
        assert box.center == Vector3(2, 1, 3)
        assert box.size == Vector3(4, 2, 6)
        assert box.extents == Vector3(2, 1, 3)

    def test_from_center_and_size(self):
        box = AxisAlignedBoundingBox.from_center_and_size(Vector3(1, 1, 1), Vector3(2, 4, 6))
        assert box.min == Vector3(0, -1, -2)
        assert box.max == Vector3(2, 3, 4)

    def test_from_center_and_extents(self):
        box = AxisAlignedBoundingBox.from_center_and_extents(Vector3(1, 1, 1), Vector3(1, 2, 3))
        assert box.min == Vector3(0, -1, -2)
        assert box.max == Vector3(2, 3, 4)

    def test_from_points(self):
        box = AxisAlignedBoundingBox.from_points([Vector3(1, 5, 0), Vector3(-2, 0, 3), Vector3(0, 1, -1)])
        assert box.min == Vector3(-2, 0, -1)
        assert box.max == Vector3(1, 5, 3)

    def test_from_single_point_is_degenerate(self):
        box = AxisAlignedBoundingBox.from_points([Vector3(1, 2, 3)])
        assert box.size == Vector3.zero()

    def test_from_no_points_raises(self):
        with pytest.raises(ValueError):
            AxisAlignedBoundingBox.from_points([])

    def test_union(self):
        a = AxisAlignedBoundingBox(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = AxisAlignedBoundingBox(Vector3(5, -1, 2), Vector3(6, 0, 3))
        u = AxisAlignedBoundingBox.union(a, b)
        assert u.min == Vector3(0, -1, 0)
        assert u.max == Vector3(6, 1, 3)

    @pytest.mark.parametrize("point,expected", [
        (Vector3(5, 5, 5), True),
        (Vector3(10, 10, 10), True),
        (Vector3(0, 0, 0), True),
        (Vector3(10.01, 5, 5), False),
        (Vector3(5, -0.01, 5), False),
    ])
    def test_contains(self, point, expected):
        box = AxisAlignedBoundingBox(Vector3.zero(), Vector3(10, 10, 10))
        assert box.contains(point) is expected

    def test_intersects(self):
        a = AxisAlignedBoundingBox(Vector3(0, 0, 0), Vector3(2, 2, 2))
        assert a.intersects(AxisAlignedBoundingBox(Vector3(1, 1, 1), Vector3(3, 3, 3)))
        assert a.intersects(AxisAlignedBoundingBox(Vector3(2, 0, 0), Vector3(4, 2, 2)))
        assert not a.intersects(AxisAlignedBoundingBox(Vector3(3, 0, 0), Vector3(4, 2, 2)))


class TestActor:
    def test_create_mints_identity_with_kind_prefix(self):
        tree = Actor.create("Oak", Vector3(1, 0, 1), kind=ActorKind.OAK_TREE)
        assert tree.identity.unique_id.prefix == "tree"
        assert tree.display_name == "Oak"

    def test_bounding_box_follows_position(self):
        actor = Actor.create("A", Vector3(0, 0, 0), extents=Vector3(1, 2, 1))
        actor.move_to(Vector3(10, 0, 0))
        assert actor.bounding_box.min == Vector3(9, -2, -1)
        assert actor.bounding_box.max == Vector3(11, 2, 1)

    def test_copy_is_independent(self):
        actor = Actor.create("A", Vector3(1, 1, 1))
        clone = actor.copy()
        clone.move_to(Vector3(5, 5, 5))
        assert actor.position == Vector3(1, 1, 1)
        assert clone.identity == actor.identity

    def test_actors_are_hashable_by_object(self):
        actor = Actor.create("A", Vector3(1, 1, 1))
        clone = actor.copy()
        assert {actor, clone, actor} == {actor, clone}
        assert actor != clone
        assert actor == actor

    def test_satisfies_locatable(self):
        assert isinstance(Actor.create("A", Vector3.zero()), Locatable)
