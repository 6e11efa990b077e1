"""Simple ASCII demo for the engine.

Run with: `python -m tetris_engine`

Starts a game, optionally applies a few commands and prints one frame: the
board with the active piece (``#``) and its landing ghost (``:``).
"""

from __future__ import annotations

import argparse
import logging

from . import ManualDropScheduler, TetrisGame, format_grid, render_grid


COMMANDS = {
    "l": lambda game: game.move("left"),
    "r": lambda game: game.move("right"),
    "d": lambda game: game.move("down"),
    "u": lambda game: game.rotate(True),
    "z": lambda game: game.rotate(False),
    "h": lambda game: game.hold(),
    " ": lambda game: game.hard_drop(),
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--moves",
        default="",
        help="Commands to apply before printing: l/r/d move, u/z rotate, h hold, space hard drop.",
    )
    parser.add_argument("--level", type=int, default=1, help="Initial level.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    game = TetrisGame({"initial_level": args.level}, scheduler_factory=ManualDropScheduler)
    game.new_game()
    for key in args.moves:
        command = COMMANDS.get(key)
        if command is not None:
            command(game)

    state = game.get_state()
    print(format_grid(render_grid(state, game.get_ghost_position())))
    held = state.hold_piece.value if state.hold_piece else "-"
    print(f"score={state.score} level={state.level} lines={state.lines} next={state.next_piece.value} hold={held}")
    if state.game_over:
        print("game over")
    game.destroy()


if __name__ == "__main__":
    main()
