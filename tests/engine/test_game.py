"""High-level gameplay tests."""

import random

import pytest

from salvo.engine import game as game_module
from salvo.engine.board import PlacementFailure
from salvo.engine.config import EngineConfig
from salvo.engine.game import Game
from salvo.engine.session import GamePhase
from salvo.engine.ship import FLEET, Coordinate, ShipSpec
from salvo.engine.shots import RejectReason, ShotKind


def _all_cells() -> list[Coordinate]:
    return [Coordinate(row, col) for row in range(10) for col in range(10)]


def test_game_flow_until_win() -> None:
    game = Game(rng_seed=42)
    setup = game.new_game()
    assert setup.session.shots == 0
    ship_cells = [coord for coords in setup.placement.values() for coord in coords]
    assert len(ship_cells) == 17

    previous = (0, 0, 0)
    for index, coord in enumerate(ship_cells, start=1):
        report = game.shoot(coord.row, coord.col)
        assert report.outcome.kind is ShotKind.HIT
        counters = (report.session.shots, report.session.hits, report.session.sunk_count)
        assert all(now >= before for now, before in zip(counters, previous))
        previous = counters
        assert report.session.game_over is (index == 17)

    state = game.get_state()
    assert state.phase is GamePhase.GAME_OVER
    assert state.session.shots == 17
    assert state.session.hits == 17
    assert state.session.sunk_count == 5
    assert state.status == "You won in 17 shots"
    assert all(state.board.cell(coord).sunk for coord in ship_cells)
    assert state.board.all_ships_sunk()


def test_shots_after_game_over_are_rejected() -> None:
    game = Game(rng_seed=8)
    setup = game.new_game()
    ship_cells = {coord for coords in setup.placement.values() for coord in coords}
    for coord in ship_cells:
        game.shoot(coord.row, coord.col)

    water = next(coord for coord in _all_cells() if coord not in ship_cells)
    report = game.shoot(water.row, water.col)

    assert report.outcome.reason is RejectReason.GAME_OVER
    assert report.session.shots == 17
    assert game.board.cell(water).hit is False
    assert game.session.game_over


def test_repeat_shot_changes_nothing() -> None:
    game = Game(rng_seed=3)
    game.new_game()
    first = game.shoot(5, 5)
    second = game.shoot(5, 5)

    assert first.outcome.accepted
    assert second.outcome.kind is ShotKind.REJECTED
    assert second.session == first.session


def test_misses_do_not_end_the_game() -> None:
    game = Game(rng_seed=11)
    setup = game.new_game()
    ship_cells = {coord for coords in setup.placement.values() for coord in coords}
    for coord in _all_cells():
        if coord not in ship_cells:
            game.shoot(coord.row, coord.col)

    assert game.session.shots == 83
    assert game.session.hits == 0
    assert not game.session.game_over
    assert game.status == "Shots: 83 · Hits: 0 · Sunk: 0/5"


def test_game_over_follows_custom_fleet_total() -> None:
    fleet = (ShipSpec("X", 3, "Trio"), ShipSpec("Y", 2, "Pair"))
    game = Game(rng_seed=1, fleet=fleet)
    setup = game.new_game()
    assert setup.session.total_ship_cells == 5

    cells = [coord for coords in setup.placement.values() for coord in coords]
    for coord in cells:
        report = game.shoot(coord.row, coord.col)
    assert report.session.game_over
    assert report.session.sunk_count == 2


def test_reset_mid_game_discards_state() -> None:
    game = Game(rng=random.Random(5))
    first = game.new_game()
    game.shoot(0, 0)
    game.shoot(9, 9)

    second = game.reset()

    assert second.session.shots == 0
    assert second.session.hits == 0
    assert not second.session.game_over
    assert second.board is not first.board
    assert not any(cell.hit or cell.sunk for row in game.board.cells for cell in row)
    assert game.board.ship_cell_count() == 17
    coords = [coord for cells in second.placement.values() for coord in cells]
    assert len(coords) == len(set(coords)) == 17


def test_returned_snapshots_are_not_altered_later() -> None:
    game = Game(rng_seed=2)
    game.new_game()
    report = game.shoot(0, 0)
    state = game.get_state()
    game.shoot(0, 1)

    assert report.session.shots == 1
    assert state.session.shots == 1
    assert state.board.cell(Coordinate(0, 1)).hit is False


def test_game_requires_new_game_before_shooting() -> None:
    game = Game()
    assert not game.started
    with pytest.raises(RuntimeError):
        game.shoot(0, 0)
    with pytest.raises(RuntimeError):
        game.get_state()


def test_out_of_bounds_shot_leaves_counters_alone() -> None:
    game = Game(rng_seed=4)
    game.new_game()
    with pytest.raises(ValueError):
        game.shoot(10, 3)
    assert game.session.shots == 0


def test_new_game_retries_board_generation(monkeypatch: pytest.MonkeyPatch) -> None:
    real_build_board = game_module.build_board
    calls = {"count": 0}

    def flaky_build_board(*args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise PlacementFailure(FLEET[0], 500)
        return real_build_board(*args, **kwargs)

    monkeypatch.setattr(game_module, "build_board", flaky_build_board)
    setup = Game(rng_seed=6, config=EngineConfig()).new_game()

    assert calls["count"] == 2
    assert len(setup.placement) == len(FLEET)


def test_new_game_gives_up_after_board_budget(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"count": 0}

    def failing_build_board(*args, **kwargs):
        calls["count"] += 1
        raise PlacementFailure(FLEET[0], 500)

    monkeypatch.setattr(game_module, "build_board", failing_build_board)
    game = Game(config=EngineConfig(max_board_attempts=3))

    with pytest.raises(PlacementFailure):
        game.new_game()
    assert calls["count"] == 3
    assert not game.started


def test_config_attempts_are_passed_to_generator(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, int] = {}
    real_build_board = game_module.build_board

    def spying_build_board(rng, fleet, max_attempts):
        seen["max_attempts"] = max_attempts
        return real_build_board(rng, fleet=fleet, max_attempts=max_attempts)

    monkeypatch.setattr(game_module, "build_board", spying_build_board)
    Game(rng_seed=0, config=EngineConfig(max_placement_attempts=750)).new_game()

    assert seen["max_attempts"] == 750
