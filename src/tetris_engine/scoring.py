"""Score table, level progression and gravity timing."""

from __future__ import annotations

from typing import Dict


# Points for a single lock event by number of lines cleared, before the
# level multiplier.
SCORE_TABLE: Dict[int, int] = {
    1: 100,
    2: 300,
    3: 500,
    4: 800,
}
SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2

LINES_PER_LEVEL = 10
MAX_LEVEL = 20

# Milliseconds per automatic downward step, indexed by ``level - 1``.
LEVEL_SPEEDS = (
    800, 720, 630, 550, 470, 380, 300, 220, 130, 100,
    80, 80, 80, 70, 70, 70, 50, 50, 50, 30,
)


def line_clear_score(lines: int, level: int) -> int:
    """Return the points awarded for clearing ``lines`` rows at ``level``.

    Counts outside the table (``0`` or anything above four) score nothing.
    """

    return SCORE_TABLE.get(lines, 0) * level


def level_for_lines(total_lines: int) -> int:
    """Return the level reached after ``total_lines`` cleared lines."""

    return min(MAX_LEVEL, total_lines // LINES_PER_LEVEL + 1)


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    The level is clamped to the table so out-of-range values still map to the
    first or last entry.
    """

    index = min(max(level - 1, 0), len(LEVEL_SPEEDS) - 1)
    return LEVEL_SPEEDS[index]
