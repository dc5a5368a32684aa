"""Tests for shot resolution."""

import pytest

from salvo.engine.board import Board
from salvo.engine.ship import Coordinate, Orientation, ShipSpec
from salvo.engine.shots import RejectReason, ShotKind, ShotOutcome, apply_shot

CRUISER = ShipSpec("C", 3, "Cruiser")
DESTROYER = ShipSpec("E", 2, "Destroyer")


@pytest.fixture
def board() -> Board:
    board = Board.empty()
    board.place_ship(CRUISER, Coordinate(4, 2), Orientation.HORIZONTAL)
    board.place_ship(DESTROYER, Coordinate(0, 0), Orientation.VERTICAL)
    return board


def test_sinking_a_ship_cell_by_cell(board: Board) -> None:
    assert apply_shot(board, 4, 2) == ShotOutcome.hit("C", just_sunk=False)
    assert apply_shot(board, 4, 3) == ShotOutcome.hit("C", just_sunk=False)
    assert not any(board.cell(coord).sunk for coord in board.ship_cells("C"))

    assert apply_shot(board, 4, 4) == ShotOutcome.hit("C", just_sunk=True)
    assert all(board.cell(coord).sunk for coord in board.ship_cells("C"))
    assert not board.cell(Coordinate(0, 0)).sunk


def test_sinking_is_independent_of_hit_order(board: Board) -> None:
    outcomes = [apply_shot(board, 4, col) for col in (4, 2, 3)]
    assert [outcome.just_sunk for outcome in outcomes] == [False, False, True]
    assert board.is_ship_sunk("C")


def test_miss_marks_cell(board: Board) -> None:
    outcome = apply_shot(board, 9, 9)
    assert outcome.kind is ShotKind.MISS
    assert outcome.accepted
    cell = board.cell(Coordinate(9, 9))
    assert cell.hit and not cell.has_ship and not cell.sunk


def test_repeat_shot_is_rejected_without_mutation(board: Board) -> None:
    apply_shot(board, 4, 2)
    before = board.clone()

    outcome = apply_shot(board, 4, 2)

    assert outcome == ShotOutcome.rejected(RejectReason.ALREADY_HIT)
    assert not outcome.accepted
    assert board.cells == before.cells


def test_shot_after_game_over_is_rejected(board: Board) -> None:
    outcome = apply_shot(board, 7, 7, game_over=True)
    assert outcome.kind is ShotKind.REJECTED
    assert outcome.reason is RejectReason.GAME_OVER
    assert board.cell(Coordinate(7, 7)).hit is False


def test_out_of_bounds_shot_fails_fast(board: Board) -> None:
    with pytest.raises(ValueError):
        apply_shot(board, 10, 0)
    with pytest.raises(ValueError):
        apply_shot(board, 0, -1)


def test_hit_never_touches_has_ship_or_other_ships(board: Board) -> None:
    apply_shot(board, 0, 0)
    apply_shot(board, 1, 0)
    assert board.is_ship_sunk("E")
    assert not board.all_ships_sunk()
    assert all(board.cell(coord).has_ship for coord in board.ship_cells("E"))
    assert not any(board.cell(coord).hit for coord in board.ship_cells("C"))
    assert board.ship_cell_count() == 5
