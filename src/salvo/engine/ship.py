"""Fleet catalogue and coordinate types for the Salvo engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GRID_SIZE = 10


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def step(self) -> tuple[int, int]:
        """Return the (row, col) delta between consecutive ship cells."""
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)


@dataclass(frozen=True)
class ShipSpec:
    """Catalogue entry describing one ship of the fleet."""

    id: str
    size: int
    name: str

    def cells_from(self, origin: Coordinate, orientation: Orientation) -> list[Coordinate]:
        """Return the ordered cells this ship covers when anchored at ``origin``."""
        delta_row, delta_col = orientation.step()
        return [
            Coordinate(origin.row + delta_row * offset, origin.col + delta_col * offset)
            for offset in range(self.size)
        ]


FLEET: tuple[ShipSpec, ...] = (
    ShipSpec("A", 5, "Carrier"),
    ShipSpec("B", 4, "Battleship"),
    ShipSpec("C", 3, "Cruiser"),
    ShipSpec("D", 3, "Submarine"),
    ShipSpec("E", 2, "Destroyer"),
)

Placement = dict[str, list[Coordinate]]


def fleet_cell_count(fleet: tuple[ShipSpec, ...] = FLEET) -> int:
    """Total number of cells occupied by the fleet."""
    return sum(spec.size for spec in fleet)


def find_spec(ship_id: str, fleet: tuple[ShipSpec, ...] = FLEET) -> ShipSpec:
    for spec in fleet:
        if spec.id == ship_id:
            return spec
    raise KeyError(f"Unknown ship id: {ship_id!r}")
