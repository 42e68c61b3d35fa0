"""Export schemas for actors, grid statistics and snapshots."""
