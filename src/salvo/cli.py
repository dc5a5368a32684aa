"""Command-line driver for playing Salvo in a terminal."""

from __future__ import annotations

import argparse
from typing import Sequence

from salvo.engine.board import Board, CellView
from salvo.engine.game import Game, ShotReport
from salvo.engine.instrumented_game import InstrumentedGame
from salvo.engine.ship import Coordinate, find_spec
from salvo.engine.shots import RejectReason, ShotKind
from salvo.telemetry import configure_console_logging, init_telemetry, load_telemetry_config

ROW_LABELS = "ABCDEFGHIJ"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SYMBOLS = {
    CellView.UNTOUCHED: ".",
    CellView.MISS: "o",
    CellView.HIT: "X",
    CellView.SUNK: "#",
    CellView.REVEALED: "S",
}

HELP_TEXT = (
    "Fire with a coordinate such as A5 or '0 4'. "
    "Commands: 'reveal' toggles ship positions, 'reset' starts over, 'q' quits.\n"
    "Legend: . untouched  o miss  X hit  # sunk  S ship (reveal mode)"
)


def _coordinate_from_input(text: str) -> Coordinate:
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        if cleaned[0] not in ROW_LABELS:
            raise ValueError("Row must be between A and J.")
        row = ROW_LABELS.index(cleaned[0])
        try:
            col = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError("Column must be a number between 1 and 10.") from exc
    else:
        parts = cleaned.split()
        if len(parts) != 2:
            raise ValueError("Use formats like A5 or '3 7'.")
        try:
            row, col = map(int, parts)
        except ValueError as exc:
            raise ValueError("Row and column must be numbers.") from exc
    if row not in range(10) or col not in range(10):
        raise ValueError("Coordinates must be within the 10x10 board.")
    return Coordinate(row, col)


def format_board(board: Board, reveal: bool = False) -> str:
    header = "    " + " ".join(f"{col + 1:>2}" for col in range(board.size))
    rows = [header]
    for row in range(board.size):
        symbols = [
            f"{SYMBOLS[board.view(Coordinate(row, col), reveal=reveal)]:>2}"
            for col in range(board.size)
        ]
        rows.append(f"{ROW_LABELS[row]} |" + " ".join(symbols))
    return "\n".join(rows)


def describe_shot(coord: Coordinate, report: ShotReport) -> str:
    label = f"{ROW_LABELS[coord.row]}{coord.col + 1}"
    outcome = report.outcome
    if outcome.kind is ShotKind.REJECTED:
        if outcome.reason is RejectReason.GAME_OVER:
            return "The game is over. Type 'reset' to play again."
        return f"{label} has already been targeted. Choose another."
    if outcome.kind is ShotKind.MISS:
        return f"{label}: miss"
    if outcome.just_sunk and outcome.ship_id is not None:
        return f"{label}: hit, you sank the {find_spec(outcome.ship_id).name}!"
    return f"{label}: hit"


def play_game(seed: int | None = None, reveal: bool = False) -> Game:
    print("Welcome to Salvo!\n")
    print(HELP_TEXT)
    game = InstrumentedGame(rng_seed=seed)
    game.new_game()

    while True:
        print()
        print(format_board(game.board, reveal=reveal))
        print(game.status)
        try:
            raw = input("Target (e.g., A5), 'reveal', 'reset' or 'q': ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            raw = "q"
        command = raw.lower()
        if command == "q":
            print("Goodbye!")
            return game
        if command == "reveal":
            reveal = not reveal
            continue
        if command == "reset":
            game.reset()
            reveal = False
            print("New fleet deployed.")
            continue
        try:
            coord = _coordinate_from_input(raw)
        except ValueError as exc:
            print(f"Invalid input: {exc}")
            continue
        report = game.shoot(coord.row, coord.col)
        print(describe_shot(coord, report))


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play Salvo via the CLI.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--reveal", action="store_true", help="Show ship positions from the start."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=LOG_LEVELS,
        help="Console log level (default: WARNING).",
    )
    args = parser.parse_args(argv)
    configure_console_logging(args.log_level)
    init_telemetry(load_telemetry_config().model_copy(update={"log_level": args.log_level}))
    play_game(seed=args.seed, reveal=args.reveal)


if __name__ == "__main__":
    main()
