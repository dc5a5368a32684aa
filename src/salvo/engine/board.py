"""Board representation and random fleet placement for the Salvo engine."""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from salvo.telemetry import get_meter, get_tracer

from .ship import FLEET, GRID_SIZE, Coordinate, Orientation, Placement, ShipSpec

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.board")
meter = get_meter("salvo.engine.board")

DEFAULT_MAX_PLACEMENT_ATTEMPTS = 500

PLACEMENT_COUNTER = meter.create_counter(
    "salvo_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)


class PlacementFailure(RuntimeError):
    """Raised when a ship could not be placed within the attempt budget."""

    def __init__(self, spec: ShipSpec, attempts: int) -> None:
        super().__init__(f"Could not place {spec.name} ({spec.id}) after {attempts} attempts.")
        self.spec = spec
        self.attempts = attempts


class CellView(Enum):
    """How a cell should be presented to the player."""

    UNTOUCHED = "untouched"
    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"
    REVEALED = "revealed"


@dataclass
class Cell:
    """A single square of the grid."""

    has_ship: bool = False
    hit: bool = False
    ship_id: str | None = None
    sunk: bool = False


def _empty_grid(size: int) -> list[list[Cell]]:
    return [[Cell() for _ in range(size)] for _ in range(size)]


@dataclass
class Board:
    """A square grid of cells together with the placement of the fleet on it."""

    size: int = GRID_SIZE
    cells: list[list[Cell]] = field(default_factory=list)
    placement: Placement = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = _empty_grid(self.size)

    @classmethod
    def empty(cls, size: int = GRID_SIZE) -> Board:
        return cls(size=size)

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell(self, coord: Coordinate) -> Cell:
        return self.cells[coord.row][coord.col]

    def can_place_ship(self, spec: ShipSpec, origin: Coordinate, orientation: Orientation) -> bool:
        """Determine whether a ship fits at ``origin`` without leaving the grid or overlapping."""
        coords = spec.cells_from(origin, orientation)
        if not all(self.is_valid_coordinate(coord) for coord in coords):
            return False
        return not any(self.cell(coord).has_ship for coord in coords)

    def place_ship(
        self, spec: ShipSpec, origin: Coordinate, orientation: Orientation
    ) -> list[Coordinate]:
        """Mark the ship's cells on the grid and record its placement."""
        if spec.id in self.placement:
            raise ValueError(f"Ship {spec.id!r} is already on the board.")
        if not self.can_place_ship(spec, origin, orientation):
            raise ValueError("Ship cannot be placed there (out of bounds or overlaps).")

        coords = spec.cells_from(origin, orientation)
        for coord in coords:
            cell = self.cell(coord)
            cell.has_ship = True
            cell.ship_id = spec.id
        self.placement[spec.id] = coords
        logger.debug(
            "ship_placed",
            extra={
                "ship_id": spec.id,
                "ship_name": spec.name,
                "orientation": orientation.name,
                "row": origin.row,
                "col": origin.col,
            },
        )
        return list(coords)

    def ship_cells(self, ship_id: str) -> list[Coordinate]:
        """Return the coordinates occupied by ``ship_id``."""
        return list(self.placement[ship_id])

    def ship_cell_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.has_ship)

    def is_ship_sunk(self, ship_id: str) -> bool:
        return all(self.cell(coord).hit for coord in self.placement[ship_id])

    def all_ships_sunk(self) -> bool:
        """Check whether every placed ship has been sunk."""
        return all(self.is_ship_sunk(ship_id) for ship_id in self.placement)

    def view(self, coord: Coordinate, reveal: bool = False) -> CellView:
        """Return the presentation state of a cell."""
        cell = self.cell(coord)
        if cell.sunk:
            return CellView.SUNK
        if cell.hit:
            return CellView.HIT if cell.has_ship else CellView.MISS
        if reveal and cell.has_ship:
            return CellView.REVEALED
        return CellView.UNTOUCHED

    def clone(self) -> Board:
        """Return a deep copy that later shots will not affect."""
        return copy.deepcopy(self)


def place_random_ship(
    board: Board,
    spec: ShipSpec,
    rng: random.Random,
    max_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS,
) -> list[Coordinate]:
    """Place ``spec`` at a random free position using rejection sampling."""
    if spec.size > board.size:
        raise ValueError(f"Ship {spec.id!r} of size {spec.size} does not fit a {board.size}x{board.size} grid.")

    orientation = rng.choice(list(Orientation))
    if orientation is Orientation.HORIZONTAL:
        row_range, col_range = board.size, board.size - spec.size + 1
    else:
        row_range, col_range = board.size - spec.size + 1, board.size

    for attempt in range(1, max_attempts + 1):
        origin = Coordinate(rng.randrange(row_range), rng.randrange(col_range))
        if board.can_place_ship(spec, origin, orientation):
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "ship_id": spec.id})
            logger.debug(
                "random_ship_placed",
                extra={"ship_id": spec.id, "attempts": attempt},
            )
            return board.place_ship(spec, origin, orientation)
        PLACEMENT_COUNTER.add(1, attributes={"result": "overlap", "ship_id": spec.id})

    logger.warning(
        "ship_placement_failed",
        extra={"ship_id": spec.id, "attempts": max_attempts, "orientation": orientation.name},
    )
    raise PlacementFailure(spec, max_attempts)


def build_board(
    rng: random.Random,
    fleet: tuple[ShipSpec, ...] = FLEET,
    max_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    size: int = GRID_SIZE,
) -> tuple[Board, Placement]:
    """Create an empty board and place every ship of ``fleet`` in catalogue order."""
    with tracer.start_as_current_span("board.build") as span:
        span.set_attribute("board.size", size)
        span.set_attribute("fleet.ships", len(fleet))
        board = Board.empty(size)
        for spec in fleet:
            place_random_ship(board, spec, rng, max_attempts=max_attempts)
        logger.info(
            "board_built",
            extra={"ships": len(board.placement), "ship_cells": board.ship_cell_count()},
        )
        return board, {ship_id: list(coords) for ship_id, coords in board.placement.items()}
