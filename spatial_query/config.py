"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for a spatial query engine instance."""

    # Spatial hash
    # Pick slightly larger than the most common query radius; single-ring
    # searches only see actors within one cell of the query cell.
    cell_length: float = 10.0

    # Actors
    default_actor_extent: float = 0.5      # Base half-size; scattered tree kinds scale it per axis

    # Scatter (deterministic population)
    world_seed: int = 42
    scatter_area: float = 200.0            # Side length of the square area, centered on the origin
    scatter_height_jitter: float = 0.0     # Max |y| offset applied to scattered actors

    # Logging
    log_level: str = "INFO"
