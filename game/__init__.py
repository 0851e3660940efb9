"""Crapptorio game package.

Public API:
    from game import FactorySim, Board, Tile, Direction, TickScheduler
"""
from game.board import Board
from game.entities import Direction, Tile
from game.scheduler import TickScheduler
from game.simulation import FactorySim

__all__ = ["Board", "Direction", "FactorySim", "TickScheduler", "Tile"]
