"""Tests for resource cluster generation."""
import random

from config import EMPTY, FACTORY, RESOURCE
from game.board import Board
from game.clusters import place_random_cluster, spawn_clusters
from game.entities import Tile
from rules_catalog import Rules


def test_spawn_clusters_only_writes_resources():
    board = Board(7)
    placed = spawn_clusters(board, random.Random(1))
    assert placed == board.count_kind(RESOURCE)
    for _, _, tile in board.cells():
        assert tile.kind in (EMPTY, RESOURCE)
        if tile.kind == RESOURCE:
            assert 1 <= tile.resource_count <= 3


def test_spawn_clusters_respects_upper_bound():
    for seed in range(30):
        board = Board(7)
        placed = spawn_clusters(board, random.Random(seed))
        # at most 5 clusters of at most 5 steps each
        assert 1 <= placed <= 25


def test_cluster_does_not_overwrite_occupied_cells():
    board = Board(1)
    board.set(0, 0, Tile.factory(processed=2))
    assert place_random_cluster(board, random.Random(4), 5) == 0
    assert board.get(0, 0) == Tile.factory(processed=2)


def test_rejected_steps_consume_budget():
    # On a 1x1 board every step after the first walks off the edge
    board = Board(1)
    assert place_random_cluster(board, random.Random(0), 5) == 1
    assert board.get(0, 0).kind == RESOURCE


def test_cluster_rules_override_ranges():
    rules = Rules(cluster_count=(1, 1), cluster_size=(1, 1), resource_count=(7, 7))
    board = Board(5)
    assert spawn_clusters(board, random.Random(9), rules) == 1
    deposits = [tile for _, _, tile in board.cells() if tile.kind == RESOURCE]
    assert [tile.resource_count for tile in deposits] == [7]


def test_zero_clusters_leave_board_empty():
    board = Board(4)
    assert spawn_clusters(board, random.Random(2), Rules(cluster_count=(0, 0))) == 0
    assert board.is_empty()


def test_empty_board_takes_no_clusters():
    for size in (0, -2):
        board = Board(size)
        assert board.size == 0
        assert place_random_cluster(board, random.Random(1), 4) == 0
        assert spawn_clusters(board, random.Random(1)) == 0
