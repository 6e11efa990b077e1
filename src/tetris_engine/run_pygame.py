"""Simple pygame front-end for the engine.

Run with: `python -m tetris_engine.run_pygame`

Rendering and input live here, outside the engine: the window draws the
snapshots delivered through ``on_state_change`` and maps keys onto the command
API.  Gravity is a :class:`ManualDropScheduler` advanced by the frame clock,
so the whole game runs on the pygame thread.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional

import pygame

from .board import VALUE_PIECES
from .game import TetrisGame
from .game_state import GameSnapshot
from .scheduler import ManualDropScheduler
from .tetromino import TETROMINO_COLORS, TetrominoType
from .utils import GHOST_VALUE, render_grid


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel showing next/hold/score
PANEL_WIDTH = 160
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
GHOST_COLOR = (70, 70, 70)
TEXT_COLOR = (230, 230, 230)

SHAPE_COLORS = {shape: pygame.Color(hex_color) for shape, hex_color in TETROMINO_COLORS.items()}


def cell_color(value: int) -> Optional[pygame.Color]:
    """Map a rendered grid value to a colour, ``None`` for empty cells."""

    if value == 0:
        return None
    if value == GHOST_VALUE:
        return pygame.Color(*GHOST_COLOR)
    return SHAPE_COLORS[VALUE_PIECES[value]]


def draw_board(screen: pygame.Surface, snapshot: GameSnapshot, ghost) -> None:
    """Render the locked cells, the ghost and the active piece."""

    for r, row in enumerate(render_grid(snapshot, ghost)):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            color = cell_color(value)
            if color is not None:
                pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, snapshot: GameSnapshot, left: int) -> None:
    """Render the score readout and the next/hold kinds."""

    def kind(value: Optional[TetrominoType]) -> str:
        return value.value if value is not None else "-"

    lines = [
        f"Score {snapshot.score}",
        f"Level {snapshot.level}",
        f"Lines {snapshot.lines}",
        f"Next  {kind(snapshot.next_piece)}",
        f"Hold  {kind(snapshot.hold_piece)}",
    ]
    if snapshot.is_paused:
        lines.append("PAUSED")
    if snapshot.game_over:
        lines.append("GAME OVER")
        lines.append("Enter: new game")
    for i, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (left + 10, 10 + i * 28))


def handle_key(event: pygame.event.Event, game: TetrisGame) -> None:
    """Map a key press onto an engine command."""

    key = event.key
    if key in (pygame.K_LEFT, pygame.K_a):
        game.move("left")
    elif key in (pygame.K_RIGHT, pygame.K_d):
        game.move("right")
    elif key in (pygame.K_DOWN, pygame.K_s):
        game.move("down")
    elif key in (pygame.K_UP, pygame.K_w):
        game.rotate(True)
    elif key == pygame.K_z:
        game.rotate(False)
    elif key == pygame.K_SPACE:
        game.hard_drop()
    elif key == pygame.K_c:
        game.hold()
    elif key in (pygame.K_p, pygame.K_ESCAPE):
        game.toggle_pause()
    elif key == pygame.K_RETURN and game.get_state().game_over:
        game.new_game()


class GameRunner:
    """Own the window, the clock and one game session."""

    def __init__(self, level: int = 1) -> None:
        self._running = False
        self._snapshot: Optional[GameSnapshot] = None
        self.game = TetrisGame(
            {"initial_level": level},
            on_state_change=self._on_state_change,
            on_line_clear=self._on_line_clear,
            scheduler_factory=ManualDropScheduler,
        )

    def _on_state_change(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot

    def _on_line_clear(self, count: int) -> None:
        LOGGER.info("Cleared %d line(s)", count)

    async def _run_loop(self) -> None:
        pygame.init()
        config = self.game.get_config()
        board_px = config.width * CELL_SIZE
        board_py = config.height * CELL_SIZE
        screen = pygame.display.set_mode((board_px + PANEL_WIDTH, board_py))
        pygame.display.set_caption("Tetris")
        font = pygame.font.Font(None, 28)
        clock = pygame.time.Clock()

        self.game.new_game()
        LOGGER.info("Game started")
        scheduler = self.game.scheduler
        self._running = True
        while self._running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(event, self.game)

            if isinstance(scheduler, ManualDropScheduler):
                scheduler.advance(dt)

            snapshot = self._snapshot
            if snapshot is not None:
                screen.fill(BACKGROUND)
                draw_board(screen, snapshot, self.game.get_ghost_position())
                draw_panel(screen, font, snapshot, board_px)
                pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        self.game.destroy()
        pygame.quit()
        LOGGER.info("Game stopped after %ds", self.game.get_play_time())

    def run(self) -> None:
        asyncio.run(self._run_loop())


def main() -> None:
    parser = argparse.ArgumentParser(description="Play in a pygame window.")
    parser.add_argument("--level", type=int, default=1, help="Initial level.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO, WARNING).")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    GameRunner(level=args.level).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
