"""Draw record.

Stores one drawing: the winning wager plus per-grade winner counts, pools and
prizes. Grades are ranked 1 (six hits) to 4 (three hits).
"""

from __future__ import annotations

from threading import Lock
from typing import NamedTuple

from lottery.models.wager import Wager

GRADES = (1, 2, 3, 4)
MIN_WINNING_HITS = 3


class GradeVector(NamedTuple):
    """Fixed four-slot vector indexed by prize grade."""

    first: int = 0
    second: int = 0
    third: int = 0
    fourth: int = 0

    def grade(self, grade: int) -> int:
        if grade not in GRADES:
            raise ValueError(f"Unknown prize grade {grade}")
        return self[grade - 1]


def prize_grade(hit_count: int) -> int | None:
    """Map a hit count to its prize grade, ``None`` below three hits."""

    if hit_count < MIN_WINNING_HITS:
        return None
    return 7 - hit_count


class Draw:
    """A single drawing identified by its sequential number."""

    def __init__(self, number: int, winning: Wager) -> None:
        self._number = number
        self._winning = winning
        self._winners = [0, 0, 0, 0]
        self._pools = GradeVector()
        self._prizes = GradeVector()
        self._finalized = False
        self._lock = Lock()

    @property
    def number(self) -> int:
        return self._number

    @property
    def winning(self) -> Wager:
        return self._winning

    @property
    def winners(self) -> GradeVector:
        return GradeVector(*self._winners)

    @property
    def pools(self) -> GradeVector:
        return self._pools

    @property
    def prizes(self) -> GradeVector:
        return self._prizes

    @property
    def finalized(self) -> bool:
        return self._finalized

    def register_hit(self, grade: int) -> None:
        if grade not in GRADES:
            raise ValueError(f"Unknown prize grade {grade}")
        with self._lock:
            if self._finalized:
                raise RuntimeError(f"Draw {self._number} is finalized; winners are frozen")
            self._winners[grade - 1] += 1

    def finalize(self, pools: GradeVector, prizes: GradeVector) -> None:
        """Write pools and prizes once. The draw is immutable afterwards."""

        with self._lock:
            if self._finalized:
                raise RuntimeError(f"Draw {self._number} is already finalized")
            self._pools = GradeVector(*pools)
            self._prizes = GradeVector(*prizes)
            self._finalized = True

    def __repr__(self) -> str:
        return f"Draw(number={self._number}, winning=[{self._winning}])"
