"""Single-player game controller."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from salvo.telemetry import get_meter, get_tracer

from .board import Board, PlacementFailure, build_board
from .config import EngineConfig, load_engine_config
from .session import GamePhase, Session
from .ship import FLEET, Placement, ShipSpec
from .shots import ShotOutcome, apply_shot

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.game")
meter = get_meter("salvo.engine.game")

GAME_COUNTER = meter.create_counter(
    "salvo_engine_games",
    unit="1",
    description="Number of games started",
)


@dataclass(frozen=True)
class GameSetup:
    """Everything produced when a game starts."""

    board: Board
    placement: Placement
    session: Session


@dataclass(frozen=True)
class ShotReport:
    outcome: ShotOutcome
    session: Session


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the current game."""

    phase: GamePhase
    board: Board
    placement: Placement
    session: Session

    @property
    def status(self) -> str:
        return self.session.status_text()


class Game:
    """Owns one board and its scoreboard and routes shots between them."""

    def __init__(
        self,
        rng: random.Random | None = None,
        rng_seed: int | None = None,
        config: EngineConfig | None = None,
        fleet: tuple[ShipSpec, ...] = FLEET,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(rng_seed)
        self.config = config or load_engine_config()
        self.fleet = fleet
        self._board: Board | None = None
        self._placement: Placement = {}
        self._session: Session | None = None

    @property
    def started(self) -> bool:
        return self._board is not None

    @property
    def board(self) -> Board:
        return self._require_started()[0]

    @property
    def session(self) -> Session:
        return self._require_started()[1]

    @property
    def placement(self) -> Placement:
        self._require_started()
        return {ship_id: list(coords) for ship_id, coords in self._placement.items()}

    @property
    def status(self) -> str:
        return self.session.status_text()

    def new_game(self) -> GameSetup:
        """Generate a fresh board and zero the scoreboard."""
        with tracer.start_as_current_span("game.new_game") as span:
            board, placement = self._generate_board()
            self._board = board
            self._placement = placement
            self._session = Session.for_fleet(self.fleet)
            span.set_attribute("fleet.ships", len(self.fleet))
            span.set_attribute("fleet.cells", self._session.total_ship_cells)
            GAME_COUNTER.add(1)
            logger.info(
                "game_started",
                extra={"ships": len(placement), "ship_cells": self._session.total_ship_cells},
            )
            return GameSetup(board=board, placement=self.placement, session=self._session.snapshot())

    def reset(self) -> GameSetup:
        """Discard the current board and scoreboard and start over."""
        logger.info("game_reset", extra={"was_started": self.started})
        return self.new_game()

    def shoot(self, row: int, col: int) -> ShotReport:
        """Fire at a cell and fold the outcome into the scoreboard."""
        with tracer.start_as_current_span("game.shoot") as span:
            span.set_attribute("row", row)
            span.set_attribute("col", col)
            board, session = self._require_started()
            outcome = apply_shot(board, row, col, game_over=session.game_over)
            session.record_shot(outcome)
            if outcome.accepted and session.game_over:
                assert board.all_ships_sunk(), "game over with ships still afloat"
            span.set_attribute("shot.outcome", outcome.kind.value)
            span.set_attribute("game.phase", session.phase.value)
            return ShotReport(outcome=outcome, session=session.snapshot())

    def get_state(self) -> GameState:
        """Return an immutable view of the current game."""
        board, session = self._require_started()
        return GameState(
            phase=session.phase,
            board=board.clone(),
            placement=self.placement,
            session=session.snapshot(),
        )

    def _generate_board(self) -> tuple[Board, Placement]:
        rounds = self.config.max_board_attempts
        for attempt in range(1, rounds + 1):
            try:
                return build_board(
                    self._rng,
                    fleet=self.fleet,
                    max_attempts=self.config.max_placement_attempts,
                )
            except PlacementFailure as exc:
                logger.warning(
                    "board_generation_retry",
                    extra={"attempt": attempt, "ship_id": exc.spec.id},
                )
                if attempt == rounds:
                    raise
        raise AssertionError("unreachable")

    def _require_started(self) -> tuple[Board, Session]:
        if self._board is None or self._session is None:
            logger.error("game_not_started")
            raise RuntimeError("Game has not been started.")
        return self._board, self._session
