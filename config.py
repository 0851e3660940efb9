"""Centralised configuration constants for Crapptorio."""
from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Grid / display
# ---------------------------------------------------------------------------
GRID_SIZE: int = 7
CELL: int = 64

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
RULES_FILE: Path = Path("data/rules.json")

# ---------------------------------------------------------------------------
# Tile kind constants
# ---------------------------------------------------------------------------
EMPTY: str = "empty"
RESOURCE: str = "resource"
MINER: str = "miner"
CONVEYOR: str = "conveyor"
FACTORY: str = "factory"
PROCESSED: str = "processed"  # factory that produced during the current tick

TILE_KINDS: tuple[str, ...] = (EMPTY, RESOURCE, MINER, CONVEYOR, FACTORY, PROCESSED)

# Tiles that can receive a unit pushed by a neighbour
SINK_KINDS: frozenset[str] = frozenset({CONVEYOR, FACTORY, MINER})

# ---------------------------------------------------------------------------
# Directional movement vectors (direction name → (d_row, d_col))
# ---------------------------------------------------------------------------
DIRS: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

# ---------------------------------------------------------------------------
# Resource cluster generation (inclusive ranges)
# ---------------------------------------------------------------------------
CLUSTER_COUNT_RANGE: tuple[int, int] = (3, 5)     # clusters per spawn
CLUSTER_SIZE_RANGE: tuple[int, int] = (3, 5)      # steps walked per cluster
RESOURCE_COUNT_RANGE: tuple[int, int] = (1, 3)    # units on each new deposit

# ---------------------------------------------------------------------------
# Simulation tuning
# ---------------------------------------------------------------------------
TICK_INTERVAL: float = 0.5          # seconds between automatic ticks
REPLENISH_RESOURCES: bool = False   # idle empty deposits regrow one unit per tick
EVENT_LOG_LIMIT: int = 12           # lifecycle messages kept on the engine
