import pytest

from tetris_engine.game import TetrisGame
from tetris_engine.scheduler import ManualDropScheduler


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.current = start

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


class SequenceRandom:
    """Stand-in for ``random.Random`` handing out kinds in a fixed order.

    The last kind repeats once the sequence is exhausted.
    """

    def __init__(self, kinds) -> None:
        self.kinds = list(kinds)
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        if len(self.kinds) > 1:
            return self.kinds.pop(0)
        return self.kinds[0]


def fill_row(board, row, skip=()):
    for col in range(board.width):
        if col not in skip:
            board.set_cell(row, col, 1)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_game(clock):
    """Build a started game whose pieces come out in the given order.

    ``make_game(O, T)`` makes O the first active piece and T the next one.
    """

    def _make(*kinds, config=None, start=True, **kwargs):
        rng = SequenceRandom([kinds[0], *kinds]) if kinds else None
        game = TetrisGame(
            config,
            scheduler_factory=ManualDropScheduler,
            clock=clock,
            rng=rng,
            **kwargs,
        )
        if start:
            game.new_game()
        return game

    return _make
