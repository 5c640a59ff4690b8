"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def offset(self, dx: int, dy: int, steps: int = 1) -> Position:
        return Position(self.x + dx * steps, self.y + dy * steps)


# The 8 compass + diagonal unit vectors. Order matters: pushes and formation scans walk them in this order.
DIRECTIONS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)
