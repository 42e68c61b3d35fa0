"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class ActorKind(IntEnum):
    """Kinds of actors that can be placed in the world."""

    GENERIC = 0
    CHARACTER = 1
    BIRCH_TREE = 2
    OAK_TREE = 3
    WILLOW_TREE = 4


TREE_KINDS: tuple[ActorKind, ...] = (
    ActorKind.BIRCH_TREE,
    ActorKind.OAK_TREE,
    ActorKind.WILLOW_TREE,
)

# Unique-id prefix per kind, mirrors how identities are minted in the world.
KIND_PREFIX: dict[ActorKind, str] = {
    ActorKind.GENERIC: "actor",
    ActorKind.CHARACTER: "character",
    ActorKind.BIRCH_TREE: "tree",
    ActorKind.OAK_TREE: "tree",
    ActorKind.WILLOW_TREE: "tree",
}


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SCATTER_X = 0
    SCATTER_Z = 1
    SCATTER_Y = 2
    SCATTER_KIND = 3
    QUERY = 4
