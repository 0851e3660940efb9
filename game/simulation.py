"""FactorySim — headless tick engine for the resource factory board.

The simulation has no pygame dependency and is safe to import in headless /
test contexts.  It never schedules itself: a host calls :meth:`FactorySim.tick`
directly, or :meth:`FactorySim.advance` on a cadence while processing is on.
"""
from __future__ import annotations

import random
import threading
from typing import Dict, List, Optional

from config import (
    CONVEYOR,
    EMPTY,
    EVENT_LOG_LIMIT,
    FACTORY,
    GRID_SIZE,
    MINER,
    PROCESSED,
    RESOURCE,
    TILE_KINDS,
)
from game.board import Board
from game.clusters import spawn_clusters
from game.entities import Direction, Tile
from rules_catalog import DEFAULT_RULES, Rules


class FactorySim:
    """Tick-based resource factory simulation.

    Every public method takes the same re-entrant lock, so a placement made
    from an input thread lands either before or after a tick's grid swap and
    never in the middle of a pass.
    """

    def __init__(self, grid_size: int = GRID_SIZE, seed: Optional[int] = None, rules: Rules = DEFAULT_RULES) -> None:
        self.rng = random.Random(seed)
        self.rules = rules
        self.board = Board(grid_size)
        self.current_score: int = 0
        self.max_score: int = 0
        self.is_processing: bool = False
        self.tick_count: int = 0
        self.event_log: List[str] = []
        self._lock = threading.RLock()

        spawn_clusters(self.board, self.rng, self.rules)
        self._log_event("Factory initialized")

    @property
    def grid_size(self) -> int:
        return self.board.size

    def _log_event(self, message: str) -> None:
        self.event_log.append(message)
        self.event_log = self.event_log[-EVENT_LOG_LIMIT:]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tile_at(self, row: int, col: int) -> Optional[Tile]:
        with self._lock:
            tile = self.board.get(row, col)
            return tile.copy() if tile is not None else None

    def summary(self) -> Dict[str, int]:
        with self._lock:
            counts = {kind: self.board.count_kind(kind) for kind in TILE_KINDS if kind != PROCESSED}
            return {
                **counts,
                "units": self.board.total_resources(),
                "ticks": self.tick_count,
                "score": self.current_score,
                "max_score": self.max_score,
            }

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def place_factory(self, row: int, col: int) -> None:
        with self._lock:
            tile = self.board.get(row, col)
            if tile is None:
                return
            self.board.set(row, col, Tile.factory(tile.resource_count))
            self._refresh_current_score()

    def place_conveyor(self, row: int, col: int, direction: Direction) -> None:
        with self._lock:
            tile = self.board.get(row, col)
            if tile is None:
                return
            self.board.set(row, col, Tile.conveyor(direction, tile.resource_count))
            self._refresh_current_score()

    def place_miner(self, row: int, col: int) -> None:
        with self._lock:
            tile = self.board.get(row, col)
            # Miners only go on top of a deposit and take over its units
            if tile is None or tile.kind != RESOURCE:
                return
            self.board.set(row, col, Tile.miner(tile.resource_count))

    def remove_tile(self, row: int, col: int) -> None:
        with self._lock:
            tile = self.board.get(row, col)
            if tile is None or tile.kind == RESOURCE:
                return
            self.board.set(row, col, Tile())
            self._refresh_current_score()

    def place_tile(self, row: int, col: int, kind: str, direction: Optional[Direction] = None) -> None:
        """Dispatch a build command by tile kind; ``EMPTY`` removes."""
        if kind == EMPTY:
            self.remove_tile(row, col)
        elif kind == FACTORY:
            self.place_factory(row, col)
        elif kind == MINER:
            self.place_miner(row, col)
        elif kind == CONVEYOR and direction is not None:
            self.place_conveyor(row, col, direction)

    # ------------------------------------------------------------------
    # Processing toggle
    # ------------------------------------------------------------------

    def toggle_processing(self) -> bool:
        with self._lock:
            if self.is_processing:
                self.stop_processing()
            else:
                self.start_processing()
            return self.is_processing

    def start_processing(self) -> None:
        with self._lock:
            if not self.is_processing:
                self.is_processing = True
                self._log_event("Processing started")

    def stop_processing(self) -> None:
        with self._lock:
            if self.is_processing:
                self.is_processing = False
                self._log_event(f"Processing stopped after tick {self.tick_count}")

    def advance(self) -> bool:
        """Run one tick if processing is on; return whether a tick ran."""
        with self._lock:
            if not self.is_processing:
                return False
            self.tick()
            return True

    # ------------------------------------------------------------------
    # Reroll / reset
    # ------------------------------------------------------------------

    def reroll(self) -> None:
        with self._lock:
            self.board.clear()
            spawn_clusters(self.board, self.rng, self.rules)
            self.current_score = 0
            self._log_event("Grid rerolled")

    def reset(self) -> None:
        with self._lock:
            self.max_score = 0
            self.is_processing = False
            self.board.clear()
            spawn_clusters(self.board, self.rng, self.rules)
            self.current_score = 0
            self.tick_count = 0
            self._log_event("Game reset")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _move_resources(self) -> None:
        snapshot = self.board
        buffer = snapshot.copy()

        for row, col, tile in snapshot.cells():
            if tile.kind == CONVEYOR and tile.resource_count > 0:
                d_row, d_col = tile.direction.offset
                target = snapshot.get(row + d_row, col + d_col)
                if target is not None and target.can_accept_resource():
                    buffer.rows[row + d_row][col + d_col].resource_count += 1
                    buffer.rows[row][col].resource_count -= 1

            elif tile.kind == MINER and tile.resource_count > 0:
                for direction in Direction.scan_order():
                    d_row, d_col = direction.offset
                    neighbour = snapshot.get(row + d_row, col + d_col)
                    if neighbour is not None and neighbour.kind == CONVEYOR:
                        buffer.rows[row + d_row][col + d_col].resource_count += 1
                        buffer.rows[row][col].resource_count -= 1
                        break

            elif tile.kind == RESOURCE and tile.resource_count == 0 and self.rules.replenish_resources:
                buffer.rows[row][col].resource_count = 1

        self.board.replace_rows(buffer)

    def _process_factories(self) -> None:
        buffer = self.board.copy()

        for row, col, tile in self.board.cells():
            out = buffer.rows[row][col]
            if tile.kind == FACTORY and tile.resource_count > 0:
                out.resource_count -= 1
                out.processed_count += 1
                out.kind = PROCESSED
            elif tile.kind == PROCESSED:
                out.kind = FACTORY

        self.board.replace_rows(buffer)

        # Producers are marked for the rest of this pass only
        for _, _, tile in self.board.cells():
            if tile.kind == PROCESSED:
                tile.kind = FACTORY

    def _refresh_current_score(self) -> None:
        self.current_score = sum(
            tile.processed_count for _, _, tile in self.board.cells() if tile.kind == FACTORY
        )

    def _update_score(self) -> None:
        self._refresh_current_score()
        self.max_score = max(self.max_score, self.current_score)

    # ------------------------------------------------------------------
    # Main tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        with self._lock:
            self._move_resources()
            self._process_factories()
            self._update_score()
            self.tick_count += 1
