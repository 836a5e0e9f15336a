from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.search import (
    collation_key,
    matches_choice,
    matches_search,
)
from herdbook.domain.models.animal import Animal

UPCOMING_BIRTH_DAYS = 30

_SORTS = {
    "name": (lambda a: collation_key(a.name), False),
    "age": (lambda a: a.birth_date, False),
    "production": (lambda a: a.today_milk or 0.0, True),
    "weight": (lambda a: a.last_weight or 0.0, True),
}


def filter_cattle(
    animals: Iterable[Animal],
    *,
    search: str | None = None,
    breed: str | None = "all",
    health_status: str | None = "all",
    sort_by: str = "name",
) -> list[Animal]:
    """Animals matching every filter, ordered by `sort_by`.

    The search term matches name or breed. Sorting: name ascending, age as
    birth date ascending, production and weight descending. Unknown sort
    keys keep the input order.
    """
    selected = [
        a
        for a in animals
        if matches_search(search, a.name, a.breed)
        and matches_choice(breed, a.breed)
        and matches_choice(health_status, a.health_status)
    ]
    sort = _SORTS.get(sort_by)
    if sort is None:
        return selected
    key, reverse = sort
    return sorted(selected, key=key, reverse=reverse)


def breed_options(animals: Iterable[Animal]) -> list[str]:
    """Distinct breeds across the whole collection, in first-seen order."""
    seen: dict[str, None] = {}
    for animal in animals:
        if animal.breed:
            seen.setdefault(animal.breed, None)
    return list(seen)


def age_in_months(birth_date: date, today: date) -> int:
    return (today.year - birth_date.year) * 12 + (today.month - birth_date.month)


def age_label(birth_date: date, today: date) -> str:
    months = age_in_months(birth_date, today)
    if months < 12:
        return f"{months}m"
    return f"{months // 12}a"


def days_until_birth(due_date: date, today: date) -> int:
    return (due_date - today).days


def is_birth_upcoming(
    due_date: date | None, today: date, window_days: int = UPCOMING_BIRTH_DAYS
) -> bool:
    if due_date is None:
        return False
    days = days_until_birth(due_date, today)
    return 0 < days <= window_days


@dataclass(slots=True)
class CattleCard:
    animal: Animal
    age_months: int
    age_label: str
    days_until_birth: int | None
    birth_upcoming: bool


def cattle_card(
    animal: Animal, today: date, *, window_days: int = UPCOMING_BIRTH_DAYS
) -> CattleCard:
    due = animal.pregnancy_due_date
    return CattleCard(
        animal=animal,
        age_months=age_in_months(animal.birth_date, today),
        age_label=age_label(animal.birth_date, today),
        days_until_birth=days_until_birth(due, today) if due else None,
        birth_upcoming=is_birth_upcoming(due, today, window_days),
    )
