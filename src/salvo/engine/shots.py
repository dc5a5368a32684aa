"""Shot resolution against a board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from salvo.telemetry import get_meter, get_tracer

from .board import Board
from .ship import Coordinate

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.shots")
meter = get_meter("salvo.engine.shots")

SHOT_COUNTER = meter.create_counter(
    "salvo_engine_shots",
    unit="1",
    description="Shots resolved against a board",
)


class ShotKind(Enum):
    """Possible results of firing at a cell."""

    REJECTED = "rejected"
    MISS = "miss"
    HIT = "hit"


class RejectReason(Enum):
    ALREADY_HIT = "already_hit"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ShotOutcome:
    """Result of a single shot.

    ``ship_id`` and ``just_sunk`` are only meaningful for hits; ``reason`` only
    for rejected shots.
    """

    kind: ShotKind
    ship_id: str | None = None
    just_sunk: bool = False
    reason: RejectReason | None = None

    @classmethod
    def rejected(cls, reason: RejectReason) -> ShotOutcome:
        return cls(ShotKind.REJECTED, reason=reason)

    @classmethod
    def miss(cls) -> ShotOutcome:
        return cls(ShotKind.MISS)

    @classmethod
    def hit(cls, ship_id: str, just_sunk: bool = False) -> ShotOutcome:
        return cls(ShotKind.HIT, ship_id=ship_id, just_sunk=just_sunk)

    @property
    def accepted(self) -> bool:
        return self.kind is not ShotKind.REJECTED

    @property
    def is_hit(self) -> bool:
        return self.kind is ShotKind.HIT


def apply_shot(board: Board, row: int, col: int, game_over: bool = False) -> ShotOutcome:
    """Fire at (row, col) and update the board's hit and sunk flags."""
    with tracer.start_as_current_span("shots.apply_shot") as span:
        span.set_attribute("shot.row", row)
        span.set_attribute("shot.col", col)
        coord = Coordinate(row, col)
        if not board.is_valid_coordinate(coord):
            logger.error("shot_out_of_bounds", extra={"row": row, "col": col})
            raise ValueError("Shot out of bounds.")

        cell = board.cell(coord)
        if game_over or cell.hit:
            reason = RejectReason.GAME_OVER if game_over else RejectReason.ALREADY_HIT
            span.set_attribute("shot.outcome", "rejected")
            span.set_attribute("shot.reject_reason", reason.value)
            SHOT_COUNTER.add(1, attributes={"outcome": "rejected", "reason": reason.value})
            logger.info("shot_rejected", extra={"row": row, "col": col, "reason": reason.value})
            return ShotOutcome.rejected(reason)

        cell.hit = True
        if not cell.has_ship:
            span.set_attribute("shot.outcome", "miss")
            SHOT_COUNTER.add(1, attributes={"outcome": "miss"})
            logger.info("shot_miss", extra={"row": row, "col": col})
            return ShotOutcome.miss()

        ship_id = cell.ship_id
        assert ship_id is not None
        just_sunk = board.is_ship_sunk(ship_id)
        if just_sunk:
            for ship_coord in board.ship_cells(ship_id):
                board.cell(ship_coord).sunk = True
            logger.info("ship_sunk", extra={"ship_id": ship_id})

        span.set_attribute("shot.outcome", "hit")
        span.set_attribute("shot.ship_id", ship_id)
        span.set_attribute("shot.just_sunk", just_sunk)
        SHOT_COUNTER.add(1, attributes={"outcome": "hit", "ship_id": ship_id})
        logger.info(
            "shot_hit",
            extra={"row": row, "col": col, "ship_id": ship_id, "just_sunk": just_sunk},
        )
        return ShotOutcome.hit(ship_id, just_sunk=just_sunk)
