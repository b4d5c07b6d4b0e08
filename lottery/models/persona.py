"""Display identity attached to simulated players.

Personas are labels only; nothing in settlement reads them.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

FIRST_NAMES = (
    "Adam", "Antoni", "Bartosz", "Damian", "Dominik", "Hubert", "Jakub", "Kacper",
    "Karol", "Maciej", "Marek", "Piotr", "Szymon", "Tomasz", "Wiktor", "Alicja",
    "Anna", "Barbara", "Beata", "Emilia", "Ewa", "Iga", "Joanna", "Julia", "Kinga",
    "Maria", "Marta", "Monika", "Natalia", "Zuzanna",
)

SURNAMES = (
    "Nowak", "Mazur", "Kaczmarek", "Kubiak", "Pawlak", "Dudek", "Lis", "Baran",
    "Gajda", "Urban", "Wilk", "Sikora", "Bednarz", "Czajka", "Rataj", "Lange",
)

CHECK_WEIGHTS = (1, 3, 7, 9, 1, 3, 7, 9, 1, 3)


def _days_in_month(month: int) -> int:
    if month == 2:
        return 28
    if (month < 8 and month % 2 == 0) or (month >= 8 and month % 2 == 1):
        return 30
    return 31


def check_digit(first_ten: str) -> int:
    """Weighted 1-3-7-9 check digit over the first ten digits of an id."""

    total = sum(w * int(d) for w, d in zip(CHECK_WEIGHTS, first_ten))
    return (10 - total % 10) % 10


def generate_id_number(rng: random.Random | None = None) -> str:
    """Return an 11-digit id: YYMMDD, 4-digit serial and a check digit.

    Birth years 2000-2006 are encoded by adding 20 to the month.
    """

    source = rng or random
    year = source.randrange(100)
    month = source.randrange(12) + 1
    day = source.randrange(_days_in_month(month)) + 1
    if year <= 6 and source.randrange(2):
        month += 20
    first_ten = f"{year:02d}{month:02d}{day:02d}{source.randrange(10000):04d}"
    return first_ten + str(check_digit(first_ten))


def is_valid_id_number(id_number: str) -> bool:
    if len(id_number) != 11 or not id_number.isdigit():
        return False
    return check_digit(id_number[:10]) == int(id_number[10])


@dataclass(frozen=True)
class PersonalInfo:
    name: str
    surname: str
    id_number: str

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> PersonalInfo:
        source = rng or random
        return cls(
            name=source.choice(FIRST_NAMES),
            surname=source.choice(SURNAMES),
            id_number=generate_id_number(source),
        )

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.surname}"

    def __str__(self) -> str:
        return f"{self.display_name}\nID: {self.id_number}"
