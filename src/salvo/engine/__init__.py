"""Game engine: board, placement, shot resolution and scoreboard."""

from .board import Board, Cell, CellView, PlacementFailure, build_board
from .game import Game, GameSetup, GameState, ShotReport
from .session import GamePhase, Session
from .ship import FLEET, GRID_SIZE, Coordinate, Orientation, ShipSpec, fleet_cell_count
from .shots import RejectReason, ShotKind, ShotOutcome, apply_shot

__all__ = [
    "Board",
    "Cell",
    "CellView",
    "Coordinate",
    "FLEET",
    "GRID_SIZE",
    "Game",
    "GamePhase",
    "GameSetup",
    "GameState",
    "Orientation",
    "PlacementFailure",
    "RejectReason",
    "Session",
    "ShipSpec",
    "ShotKind",
    "ShotOutcome",
    "ShotReport",
    "apply_shot",
    "build_board",
    "fleet_cell_count",
]
