"""Core data models: Vector3, Identity, AxisAlignedBoundingBox, Actor."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Protocol, runtime_checkable

from spatial_query.core.enums import KIND_PREFIX, ActorKind


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable 3D float coordinate. Y is up; X/Z span the horizontal plane."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def zero() -> Vector3:
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def unit_x() -> Vector3:
        return Vector3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vector3:
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> Vector3:
        return Vector3(0.0, 0.0, 1.0)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vector3:
        """Return a unit-length copy. Raises ValueError for the zero vector."""
        n = self.length()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector.")
        return self / n

    def distance_squared_to(self, other: Vector3) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance_to(self, other: Vector3) -> float:
        return math.sqrt(self.distance_squared_to(other))

    def min(self, other: Vector3) -> Vector3:
        return Vector3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max(self, other: Vector3) -> Vector3:
        return Vector3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def __repr__(self) -> str:
        return f"({self.x:g}, {self.y:g}, {self.z:g})"


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True, slots=True)
class UniqueId:
    """A prefix plus a UUID, rendered as ``"<prefix>-<uuid>"``."""

    prefix: str
    guid: uuid.UUID

    @classmethod
    def new(cls, prefix: str) -> UniqueId:
        return cls(prefix, uuid.uuid4())

    @classmethod
    def from_string(cls, value: str) -> UniqueId:
        # The UUID itself contains dashes, so only the first one separates the prefix.
        prefix, _, guid = value.partition("-")
        return cls(prefix, uuid.UUID(guid))

    def __str__(self) -> str:
        return f"{self.prefix}-{self.guid}"


@dataclass(frozen=True, order=True, slots=True)
class Identity:
    """Display name plus unique id. Hashable and totally ordered."""

    display_name: str
    unique_id: UniqueId

    @classmethod
    def new(cls, unique_id_prefix: str, display_name: str) -> Identity:
        return cls(display_name, UniqueId.new(unique_id_prefix))

    def __str__(self) -> str:
        return f"{self.display_name} ({self.unique_id})"


# ---------------------------------------------------------------------------
# Bounding boxes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AxisAlignedBoundingBox:
    """Box defined by its minimum and maximum corners."""

    min: Vector3
    max: Vector3

    @property
    def center(self) -> Vector3:
        return (self.min + self.max) / 2.0

    @property
    def size(self) -> Vector3:
        return self.max - self.min

    @property
    def extents(self) -> Vector3:
        return self.size / 2.0

    @classmethod
    def from_center_and_size(cls, center: Vector3, size: Vector3) -> AxisAlignedBoundingBox:
        half = size / 2.0
        return cls(center - half, center + half)

    @classmethod
    def from_center_and_extents(cls, center: Vector3, extents: Vector3) -> AxisAlignedBoundingBox:
        return cls(center - extents, center + extents)

    @classmethod
    def from_points(cls, points: Iterable[Vector3]) -> AxisAlignedBoundingBox:
        """Smallest box enclosing *points*. Raises ValueError when empty."""
        pts = list(points)
        if not pts:
            raise ValueError("Cannot create a bounding box from an empty point set.")
        lo = hi = pts[0]
        for p in pts[1:]:
            lo = lo.min(p)
            hi = hi.max(p)
        return cls(lo, hi)

    @staticmethod
    def union(a: AxisAlignedBoundingBox, b: AxisAlignedBoundingBox) -> AxisAlignedBoundingBox:
        return AxisAlignedBoundingBox(a.min.min(b.min), a.max.max(b.max))

    def contains(self, point: Vector3) -> bool:
        """True if *point* is inside or on the boundary."""
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )

    def intersects(self, other: AxisAlignedBoundingBox) -> bool:
        """True if the boxes overlap; touching faces count."""
        return (
            self.min.x <= other.max.x and self.max.x >= other.min.x
            and self.min.y <= other.max.y and self.max.y >= other.min.y
            and self.min.z <= other.max.z and self.max.z >= other.min.z
        )


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------

@runtime_checkable
class Locatable(Protocol):
    """What the spatial index needs from anything it stores."""

    @property
    def identity(self) -> Hashable: ...

    @property
    def position(self) -> Vector3: ...

    @property
    def bounding_box(self) -> AxisAlignedBoundingBox: ...


_DEFAULT_EXTENTS = Vector3(0.5, 0.5, 0.5)


@dataclass(slots=True, eq=False)
class Actor:
    """A world actor: tree, character, or anything else that can be located.

    The actor owns its live position. After changing it, push the change
    into any grid holding the actor with ``try_update_actor_position``.
    Actors compare and hash by object; use ``identity`` to match copies.
    """

    identity: Identity
    position: Vector3
    kind: ActorKind = ActorKind.GENERIC
    extents: Vector3 = field(default=_DEFAULT_EXTENTS)
    description: str = ""

    @classmethod
    def create(
        cls,
        display_name: str,
        position: Vector3,
        kind: ActorKind = ActorKind.GENERIC,
        extents: Vector3 | None = None,
        description: str = "",
    ) -> Actor:
        """Mint a fresh identity for *display_name* and build the actor."""
        return cls(
            identity=Identity.new(KIND_PREFIX[kind], display_name),
            position=position,
            kind=kind,
            extents=extents if extents is not None else _DEFAULT_EXTENTS,
            description=description,
        )

    @property
    def bounding_box(self) -> AxisAlignedBoundingBox:
        return AxisAlignedBoundingBox.from_center_and_extents(self.position, self.extents)

    @property
    def display_name(self) -> str:
        return self.identity.display_name

    def move_to(self, position: Vector3) -> None:
        self.position = position

    def copy(self) -> Actor:
        return Actor(
            identity=self.identity,
            position=self.position,
            kind=self.kind,
            extents=self.extents,
            description=self.description,
        )

    def __repr__(self) -> str:
        return f"Actor({self.identity.display_name!r}, {self.kind.name}, pos={self.position})"
