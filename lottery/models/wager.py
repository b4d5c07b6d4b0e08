"""Six-number wager.

A wager is a set of numbers, so ``Wager([3, 1, 2, 4, 5, 6])`` and
``Wager([1, 2, 3, 4, 5, 6])`` are the same bet. Construction does not validate;
call :meth:`Wager.is_valid` before treating a wager as a legal bet.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from math import comb

from lottery.errors import InvalidInputError

NUMBERS_PER_WAGER = 6
MAX_NUMBER = 49
MAX_DISTINCT_WAGERS = comb(MAX_NUMBER, NUMBERS_PER_WAGER)


@dataclass(frozen=True)
class Wager:
    """An order-independent set of numbers chosen as one bet."""

    numbers: frozenset[int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "numbers", frozenset(int(n) for n in self.numbers))

    @classmethod
    def of(cls, *numbers: int) -> Wager:
        return cls(frozenset(numbers))

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Wager:
        """Draw 6 unique numbers in ``1..49``. The result is always valid."""

        source = rng or random
        return cls(frozenset(source.sample(range(1, MAX_NUMBER + 1), NUMBERS_PER_WAGER)))

    @classmethod
    def random_list(cls, count: int, rng: random.Random | None = None) -> list[Wager]:
        """Return ``count`` distinct random wagers."""

        if count < 1:
            raise InvalidInputError(
                message="Invalid wager count",
                details={"count": ["Must be >= 1"]},
            )
        if count > MAX_DISTINCT_WAGERS:
            raise InvalidInputError(
                message="Invalid wager count",
                details={"count": [f"Not enough unique wagers (must be <= {MAX_DISTINCT_WAGERS})"]},
            )

        picked: list[Wager] = []
        seen: set[Wager] = set()
        while len(picked) < count:
            wager = cls.random(rng)
            if wager in seen:
                continue
            seen.add(wager)
            picked.append(wager)
        return picked

    def is_valid(self) -> bool:
        if len(self.numbers) != NUMBERS_PER_WAGER:
            return False
        return all(1 <= n <= MAX_NUMBER for n in self.numbers)

    def hit_count(self, other: Wager) -> int:
        return len(self.numbers & other.numbers)

    def sorted_numbers(self) -> list[int]:
        return sorted(self.numbers)

    def __str__(self) -> str:
        return " ".join(f"{n:2d}" for n in self.sorted_numbers())
