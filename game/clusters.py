"""Procedural placement of resource deposits.

Each cluster is a short random walk.  A step only writes a deposit when it
lands on an empty in-bounds cell; otherwise the step is spent without a write
and the walk carries on from the new position, so clusters may come out
smaller than requested or scattered once they wander off the board.
"""
from __future__ import annotations

import random

from config import EMPTY
from game.board import Board
from game.entities import Direction, Tile
from rules_catalog import DEFAULT_RULES, Rules


def place_random_cluster(board: Board, rng: random.Random, size: int, rules: Rules = DEFAULT_RULES) -> int:
    """Walk ``size`` steps from a random cell, dropping deposits on empty cells."""
    if board.size <= 0:
        return 0
    row = rng.randrange(board.size)
    col = rng.randrange(board.size)
    placed = 0
    steps = list(Direction)
    lo, hi = rules.resource_count

    for _ in range(size):
        tile = board.get(row, col)
        if tile is not None and tile.kind == EMPTY:
            board.set(row, col, Tile.resource(rng.randint(lo, hi)))
            placed += 1
        d_row, d_col = rng.choice(steps).offset
        row += d_row
        col += d_col

    return placed


def spawn_clusters(board: Board, rng: random.Random, rules: Rules = DEFAULT_RULES) -> int:
    """Scatter a random number of clusters and return how many deposits landed."""
    count = rng.randint(*rules.cluster_count)
    placed = 0
    for _ in range(count):
        placed += place_random_cluster(board, rng, rng.randint(*rules.cluster_size), rules)
    return placed
