"""Cell coordinate math for the horizontal (X/Z) grid."""

from __future__ import annotations

import math

from spatial_query.core.models import Vector3

Cell = tuple[int, int]

# Fixed enumeration order of the 3x3 block, center included.
_NEIGHBOR_OFFSETS: tuple[Cell, ...] = (
    (1, 1), (0, 1), (-1, 1),
    (1, 0), (0, 0), (-1, 0),
    (1, -1), (0, -1), (-1, -1),
)


def cell_of(position: Vector3, cell_length: float) -> Cell:
    """Return the ``(x, z)`` cell containing *position*.

    Floors rather than truncates, so ``x = -0.5`` with a cell length of 10
    lands in cell ``-1``. ``cell_length > 0`` is the caller's responsibility.
    """
    return math.floor(position.x / cell_length), math.floor(position.z / cell_length)


def neighbor_cells(cell: Cell) -> list[Cell]:
    """Return *cell* and its 8 surrounding cells."""
    cx, cz = cell
    return [(cx + dx, cz + dz) for dx, dz in _NEIGHBOR_OFFSETS]
