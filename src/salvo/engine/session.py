"""Scoreboard for a single game."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .ship import FLEET, ShipSpec, fleet_cell_count
from .shots import ShotOutcome

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """High-level lifecycle of a game."""

    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


@dataclass
class Session:
    """Shot, hit and sunk counters plus the win flag."""

    total_ship_cells: int
    fleet_size: int
    shots: int = 0
    hits: int = 0
    sunk_count: int = 0
    game_over: bool = False

    @classmethod
    def for_fleet(cls, fleet: tuple[ShipSpec, ...] = FLEET) -> Session:
        return cls(total_ship_cells=fleet_cell_count(fleet), fleet_size=len(fleet))

    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER if self.game_over else GamePhase.IN_PROGRESS

    def record_shot(self, outcome: ShotOutcome) -> None:
        """Update counters from an outcome produced by the shot resolver."""
        if not outcome.accepted:
            return
        self.shots += 1
        if outcome.is_hit:
            self.hits += 1
            if outcome.just_sunk:
                self.sunk_count += 1
        if not self.game_over and self.hits >= self.total_ship_cells:
            self.game_over = True
            logger.info("game_over", extra={"shots": self.shots, "hits": self.hits})

    def status_text(self) -> str:
        """Human-readable summary of the counters."""
        if self.game_over:
            return f"You won in {self.shots} shots"
        return f"Shots: {self.shots} · Hits: {self.hits} · Sunk: {self.sunk_count}/{self.fleet_size}"

    def snapshot(self) -> Session:
        return replace(self)
