"""Fixed-size square grid of tiles.

Coordinates are ``(row, col)`` with ``(0, 0)`` in the top-left corner.  Reads
outside the board return ``None`` and writes outside it are ignored, so hosts
can forward raw input without validating it first.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from config import EMPTY, GRID_SIZE
from game.entities import Tile


class Board:
    def __init__(self, size: int = GRID_SIZE) -> None:
        self.size = max(0, size)
        self.rows: List[List[Tile]] = [[Tile() for _ in range(self.size)] for _ in range(self.size)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Optional[Tile]:
        if not self.in_bounds(row, col):
            return None
        return self.rows[row][col]

    def set(self, row: int, col: int, tile: Tile) -> None:
        if not self.in_bounds(row, col):
            return
        self.rows[row][col] = tile

    def cells(self) -> Iterator[Tuple[int, int, Tile]]:
        """Yield ``(row, col, tile)`` in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield row, col, self.rows[row][col]

    def for_each_cell(self, fn: Callable[[int, int, Tile], None]) -> None:
        for row, col, tile in self.cells():
            fn(row, col, tile)

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.size = self.size
        clone.rows = [[tile.copy() for tile in row] for row in self.rows]
        return clone

    def replace_rows(self, other: "Board") -> None:
        """Swap in ``other``'s grid in one assignment."""
        if other.size != self.size:
            raise ValueError(f"cannot swap a {other.size}x{other.size} grid into a {self.size}x{self.size} board")
        self.rows = other.rows

    def clear(self) -> None:
        self.rows = [[Tile() for _ in range(self.size)] for _ in range(self.size)]

    def count_kind(self, kind: str) -> int:
        return sum(1 for _, _, tile in self.cells() if tile.kind == kind)

    def total_resources(self) -> int:
        return sum(tile.resource_count for _, _, tile in self.cells())

    def is_empty(self) -> bool:
        return all(tile.kind == EMPTY for _, _, tile in self.cells())
