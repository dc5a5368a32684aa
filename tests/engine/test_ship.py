"""Tests for the fleet catalogue."""

import pytest

from salvo.engine.ship import FLEET, Coordinate, Orientation, ShipSpec, fleet_cell_count, find_spec


def test_fleet_catalogue_sizes() -> None:
    assert [spec.size for spec in FLEET] == [5, 4, 3, 3, 2]
    assert len({spec.id for spec in FLEET}) == len(FLEET)
    assert fleet_cell_count() == 17


def test_fleet_cell_count_follows_catalogue() -> None:
    fleet = (ShipSpec("X", 4, "Scout"), ShipSpec("Y", 1, "Dinghy"))
    assert fleet_cell_count(fleet) == 5


def test_cells_from_horizontal_and_vertical() -> None:
    spec = ShipSpec("E", 2, "Destroyer")
    assert spec.cells_from(Coordinate(0, 0), Orientation.HORIZONTAL) == [
        Coordinate(0, 0),
        Coordinate(0, 1),
    ]
    assert spec.cells_from(Coordinate(3, 7), Orientation.VERTICAL) == [
        Coordinate(3, 7),
        Coordinate(4, 7),
    ]


def test_find_spec() -> None:
    assert find_spec("A").name == "Carrier"
    with pytest.raises(KeyError):
        find_spec("Z")
