"""Core dataclasses for the Crapptorio simulation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from config import CONVEYOR, DIRS, EMPTY, FACTORY, MINER, RESOURCE, SINK_KINDS


class Direction(Enum):
    """Cardinal directions a conveyor can face."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> Tuple[int, int]:
        """Return ``(d_row, d_col)`` for this direction."""
        return DIRS[self.value]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def arrow(self) -> str:
        return _ARROWS[self]

    @staticmethod
    def scan_order() -> Tuple["Direction", ...]:
        """Order in which a miner looks for a neighbouring conveyor."""
        return (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_ARROWS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


@dataclass
class Tile:
    """A single cell on the factory grid.

    ``resource_count`` is the number of units sitting on the cell right now.
    ``processed_count`` only grows while the tile is a factory and is cleared
    when the board is rerolled or reset.  ``direction`` is only meaningful for
    conveyors.
    """

    kind: str = EMPTY
    direction: Optional[Direction] = None
    resource_count: int = 0
    processed_count: int = 0

    @classmethod
    def resource(cls, count: int) -> "Tile":
        return cls(RESOURCE, resource_count=count)

    @classmethod
    def miner(cls, count: int = 0) -> "Tile":
        return cls(MINER, resource_count=count)

    @classmethod
    def conveyor(cls, direction: Direction, count: int = 0) -> "Tile":
        return cls(CONVEYOR, direction=direction, resource_count=count)

    @classmethod
    def factory(cls, count: int = 0, processed: int = 0) -> "Tile":
        return cls(FACTORY, resource_count=count, processed_count=processed)

    def can_accept_resource(self) -> bool:
        return self.kind in SINK_KINDS

    def same_type(self, other: "Tile") -> bool:
        if self.kind != other.kind:
            return False
        if self.kind == CONVEYOR:
            return self.direction == other.direction
        return True

    def copy(self) -> "Tile":
        return Tile(self.kind, self.direction, self.resource_count, self.processed_count)
