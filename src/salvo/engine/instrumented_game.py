"""Instrumented game with telemetry hooks."""

from __future__ import annotations

import time

from salvo.engine.game import Game, GameSetup, ShotReport
from salvo.telemetry import (
    get_logger,
    get_tracer,
    record_game_distribution,
    record_game_metric,
)


class InstrumentedGame(Game):
    """Wraps Game with tracing, metrics, and logging."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._logger = get_logger("salvo.engine")
        self._tracer = get_tracer("salvo.engine")
        self._game_span_cm = None
        self._game_span = None
        self._game_start_time: float | None = None
        self._game_id_counter = 0

    def new_game(self) -> GameSetup:
        self._start_game_span()
        with self._tracer.start_as_current_span("salvo.engine.new_game") as span:
            self._logger.info("Board generation started")
            setup = super().new_game()
            span.set_attribute("ships", len(setup.placement))
            span.set_attribute("ship_cells", setup.session.total_ship_cells)
            record_game_metric(
                "salvo_game_setup_total",
                1,
                {"ships": len(setup.placement)},
            )
            self._logger.info("Board generation finished")
            return setup

    def shoot(self, row: int, col: int) -> ShotReport:
        with self._tracer.start_as_current_span("salvo.engine.shoot") as span:
            span.set_attribute("game.id", self._game_id_counter)
            span.set_attribute("coord.row", row)
            span.set_attribute("coord.col", col)

            try:
                report = super().shoot(row, col)
            except (ValueError, RuntimeError) as exc:
                record_game_metric(
                    "salvo_game_invalid_shots_total",
                    1,
                    {"reason": type(exc).__name__},
                )
                span.record_exception(exc)
                span.set_attribute("error", True)
                self._logger.error("Invalid shot at (%d,%d): %s", row, col, exc)
                raise

            outcome = report.outcome
            span.set_attribute("shot_outcome", outcome.kind.name)
            span.set_attribute("sunk", outcome.just_sunk)

            if not outcome.accepted:
                record_game_metric(
                    "salvo_shots_rejected_total",
                    1,
                    {"reason": outcome.reason.value if outcome.reason else "unknown"},
                )
                self._logger.info("shoot coord=(%d,%d) rejected", row, col)
                return report

            record_game_metric("salvo_shots_total", 1)
            record_game_metric("salvo_shots_by_result_total", 1, {"result": outcome.kind.value})
            if outcome.just_sunk:
                record_game_metric("salvo_ships_sunk_total", 1, {"ship_id": outcome.ship_id or ""})

            self._logger.info(
                "shoot coord=(%d,%d) outcome=%s",
                row,
                col,
                outcome.kind.name,
            )

            if report.session.game_over:
                self._finish_game(report)

            return report

    def _start_game_span(self) -> None:
        self._close_game_span()
        self._game_start_time = time.perf_counter()
        self._game_id_counter += 1
        self._game_span_cm = self._tracer.start_as_current_span("salvo.engine.game")
        self._game_span = self._game_span_cm.__enter__()
        self._game_span.set_attribute("game.id", self._game_id_counter)

    def _finish_game(self, report: ShotReport) -> None:
        duration = (time.perf_counter() - self._game_start_time) if self._game_start_time else 0.0
        shots = report.session.shots

        record_game_metric("salvo_game_completed_total", 1)
        record_game_distribution("salvo_game_duration_seconds", duration, unit="s")
        record_game_distribution("salvo_game_shots_to_win", shots)

        with self._tracer.start_as_current_span("salvo.engine.game_complete") as span:
            span.set_attribute("game.id", self._game_id_counter)
            span.set_attribute("shots", shots)
            span.set_attribute("duration_ms", duration * 1000)

        if self._game_span is not None:
            self._game_span.set_attribute("shots", shots)
            self._game_span.set_attribute("duration_ms", duration * 1000)

        self._logger.info("Game finished. shots=%d duration_s=%.3f", shots, duration)
        self._close_game_span()

    def _close_game_span(self) -> None:
        if self._game_span_cm is not None:
            self._game_span_cm.__exit__(None, None, None)
            self._game_span_cm = None
            self._game_span = None
