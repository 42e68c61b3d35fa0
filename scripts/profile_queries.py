#!/usr/bin/env python3
"""Spatial query profiler.

Usage:
    python scripts/profile_queries.py --ticks 200 --actors 2000
    python scripts/profile_queries.py --ticks 500 --cell 8 --cprofile queries.prof

Each tick moves every actor a small deterministic step, pushes the moves
into the grid, then runs a batch of queries around a sample of actors.

Reports:
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Per-phase breakdown (update, near, nearest, raycast)
    - Grid occupancy at the end of the run
    - Optional: cProfile dump
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from spatial_query.config import EngineConfig
from spatial_query.core.enums import Domain
from spatial_query.core.models import Vector3
from spatial_query.core.world_state import WorldState
from spatial_query.systems.rng import DeterministicRNG
from spatial_query.systems.scatter import ActorScatter
from spatial_query.systems.spatial_hash import SpatialHashGrid
from spatial_query.utils.logging import setup_logging


def _build_world(cfg: EngineConfig, num_actors: int) -> tuple[WorldState, DeterministicRNG]:
    rng = DeterministicRNG(cfg.world_seed)
    world = WorldState(SpatialHashGrid.from_config((), cfg))
    ActorScatter(cfg, rng).scatter(world, num_actors)
    return world, rng


def _run(cfg: EngineConfig, num_ticks: int, num_actors: int, sample: int, step: float) -> dict:
    """Run the tick loop and collect per-phase timings."""
    world, rng = _build_world(cfg, num_actors)
    grid = world.spatial_index
    identities = sorted(world.actors)
    radius = cfg.cell_length

    tick_times: list[float] = []
    phase_times: list[tuple[float, float, float, float]] = []
    relocations: list[int] = []

    for tick in range(num_ticks):
        t_start = time.perf_counter()

        # --- Phase 1: push moves ---
        moved = 0
        for i, identity in enumerate(identities):
            actor = world.actors[identity]
            dx = rng.next_range(Domain.QUERY, i, -step, step, salt=tick * 2)
            dz = rng.next_range(Domain.QUERY, i, -step, step, salt=tick * 2 + 1)
            if world.move_actor(identity, actor.position + Vector3(dx, 0.0, dz)):
                moved += 1
        t1 = time.perf_counter()

        sampled = [world.actors[identities[(tick * sample + k) % len(identities)]] for k in range(sample)]

        # --- Phase 2: neighborhood ---
        for actor in sampled:
            grid.get_actors_near(actor)
            grid.count_in_range(actor.position, radius)
        t2 = time.perf_counter()

        # --- Phase 3: nearest ---
        for actor in sampled:
            grid.get_nearest_many(actor.position, radius, 5)
        t3 = time.perf_counter()

        # --- Phase 4: raycast ---
        for actor in sampled[: max(1, sample // 10)]:
            grid.raycast(actor.position, Vector3.unit_x(), radius)
        t4 = time.perf_counter()

        tick_times.append(t4 - t_start)
        phase_times.append((t1 - t_start, t2 - t1, t3 - t2, t4 - t3))
        relocations.append(moved)
        world.advance_tick()

    return {
        "tick_times": tick_times,
        "phase_times": phase_times,
        "relocations": relocations,
        "stats": grid.stats(),
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    tick_times = data["tick_times"]
    phase_times = data["phase_times"]
    stats = data["stats"]
    num_ticks = len(tick_times)

    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  SPATIAL QUERY PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg relocations:   {statistics.mean(data['relocations']):.1f} per tick")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(tick_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(tick_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(tick_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(tick_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(tick_times) * 1000:>10.3f}")

    total_sum = sum(tick_times)
    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    for idx, name in enumerate(("Update", "Near", "Nearest", "Raycast")):
        times = [p[idx] for p in phase_times]
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {statistics.mean(times) * 1000:>10.3f} "
              f"{_percentile(times, 95) * 1000:>10.3f} {pct:>9.1f}%")

    print(f"\n  Cell length:       {stats.cell_length:g}")
    print(f"  Actors:            {stats.actor_count}")
    print(f"  Occupied cells:    {stats.bucket_count}")
    print(f"  Largest bucket:    {stats.max_bucket_size}")
    print(f"  Mean bucket size:  {stats.mean_bucket_size:.2f}")
    print("\n" + "=" * 70)


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Profile the spatial query engine")
    parser.add_argument("--ticks", type=_positive_int, default=200, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="Scatter seed")
    parser.add_argument("--actors", type=_positive_int, default=2000, help="Actors to scatter")
    parser.add_argument("--area", type=float, default=400.0, help="Side length of the scatter area")
    parser.add_argument("--cell", type=float, default=10.0, help="Grid cell length")
    parser.add_argument("--sample", type=_positive_int, default=100, help="Actors sampled per tick")
    parser.add_argument("--step", type=float, default=1.5, help="Max per-axis move per tick")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    cfg = EngineConfig(
        cell_length=args.cell,
        world_seed=args.seed,
        scatter_area=args.area,
        log_level=args.log_level,
    )
    setup_logging(cfg.log_level)

    print(f"Profiling: {args.ticks} ticks, seed={args.seed}, actors={args.actors}, "
          f"area={args.area:g}, cell={args.cell:g}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run(cfg, args.ticks, args.actors, args.sample, args.step)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
