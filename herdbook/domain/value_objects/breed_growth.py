from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BreedGrowthProfile:
    """Linear growth model used to derive the expected weight band.

    At `age_months` the raw band is
    [min_at_birth + age * min_gain_per_month, max_at_birth + age * max_gain_per_month],
    capped at 90 % (lower bound) and 100 % (upper bound) of `adult_weight`.
    """

    min_at_birth: float
    min_gain_per_month: float
    max_at_birth: float
    max_gain_per_month: float
    adult_weight: float


DEFAULT_BREED = "Holstein"

BREED_GROWTH: dict[str, BreedGrowthProfile] = {
    "Holstein": BreedGrowthProfile(40, 25, 50, 30, 650),
    "Jersey": BreedGrowthProfile(30, 18, 40, 22, 450),
    "Angus": BreedGrowthProfile(35, 22, 45, 28, 600),
}


def growth_profile_for(breed: str | None) -> BreedGrowthProfile:
    if breed and breed in BREED_GROWTH:
        return BREED_GROWTH[breed]
    return BREED_GROWTH[DEFAULT_BREED]


# Reference weight of an adult animal, shown next to each weighing
ADULT_WEIGHT_RANGES: dict[str, tuple[float, float]] = {
    "Holstein": (550, 750),
    "Jersey": (350, 450),
    "Angus": (500, 700),
    "Brahman": (450, 650),
    "Charolais": (600, 800),
    "Hereford": (500, 700),
}
DEFAULT_ADULT_RANGE = (400.0, 700.0)


def adult_weight_range(breed: str | None) -> tuple[float, float]:
    return ADULT_WEIGHT_RANGES.get(breed or "", DEFAULT_ADULT_RANGE)
