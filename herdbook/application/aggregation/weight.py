from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from herdbook.application.aggregation.search import (
    collation_key,
    matches_choice,
    matches_search,
)
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.weight_record import WeightRecord
from herdbook.domain.value_objects.breed_growth import adult_weight_range, growth_profile_for

WEIGHT_DATE_RANGES: dict[str, int | None] = {
    "all": None,
    "last-30-days": 30,
    "last-90-days": 90,
    "last-365-days": 365,
}

_SORTS = {
    "date-desc": (lambda r: r.weight_date, True),
    "date-asc": (lambda r: r.weight_date, False),
    "weight-desc": (lambda r: r.weight_kg, True),
    "weight-asc": (lambda r: r.weight_kg, False),
    "change-desc": (lambda r: r.weight_change or 0.0, True),
    "change-asc": (lambda r: r.weight_change or 0.0, False),
    "animal": (lambda r: collation_key(r.animal_name), False),
}

DAYS_PER_MONTH = 30
RECENT_POINTS = 3
TREND_THRESHOLD_KG = 5.0


def filter_weight_records(
    records: Iterable[WeightRecord],
    *,
    today: date,
    search: str | None = None,
    animal_id: str | None = "all",
    date_range: str = "all",
    sort_by: str = "date-desc",
) -> list[WeightRecord]:
    days = WEIGHT_DATE_RANGES.get(date_range)
    since = today - timedelta(days=days) if days is not None else None
    selected = [
        r
        for r in records
        if matches_search(search, r.animal_name, r.animal_breed)
        and matches_choice(animal_id, r.animal_id)
        and (since is None or r.weight_date >= since)
    ]
    sort = _SORTS.get(sort_by)
    if sort is None:
        return selected
    key, reverse = sort
    return sorted(selected, key=key, reverse=reverse)


@dataclass(slots=True)
class WeightStatistics:
    record_count: int
    average_weight: float
    max_weight: float
    min_weight: float
    average_change: float
    positive_changes: int
    negative_changes: int


def weight_statistics(records: Sequence[WeightRecord]) -> WeightStatistics | None:
    if not records:
        return None
    weights = [r.weight_kg for r in records]
    changes = [r.weight_change for r in records if r.weight_change is not None]
    return WeightStatistics(
        record_count=len(weights),
        average_weight=sum(weights) / len(weights),
        max_weight=max(weights),
        min_weight=min(weights),
        average_change=sum(changes) / len(changes) if changes else 0.0,
        positive_changes=sum(1 for c in changes if c > 0),
        negative_changes=sum(1 for c in changes if c < 0),
    )


@dataclass(frozen=True, slots=True)
class WeightBand:
    min: float
    max: float
    target: float

    def classify(self, weight_kg: float) -> str:
        if weight_kg < self.min:
            return "underweight"
        if weight_kg > self.max:
            return "overweight"
        return "optimal"


def expected_weight_band(breed: str | None, age_months: int) -> WeightBand:
    """Breed and age based [min, max] band, capped by the adult weight.

    Unknown breeds fall back to the default growth profile.
    """
    profile = growth_profile_for(breed)
    raw_min = profile.min_at_birth + age_months * profile.min_gain_per_month
    raw_max = profile.max_at_birth + age_months * profile.max_gain_per_month
    return WeightBand(
        min=min(raw_min, profile.adult_weight * 0.9),
        max=min(raw_max, profile.adult_weight),
        target=min((raw_min + raw_max) / 2, profile.adult_weight * 0.95),
    )


@dataclass(slots=True)
class WeightPoint:
    date: date
    weight_kg: float
    weight_change: float
    age_months: int
    gain_rate: float
    band: WeightBand
    status: str  # underweight | overweight | optimal
    notes: str | None = None


def weight_evolution(records: Iterable[WeightRecord], animal: Animal) -> list[WeightPoint]:
    """Chronological weight series of one animal with growth indicators.

    `gain_rate` is kg per 30 days against the previous point (0 when both
    points share a date).
    """
    history = sorted(
        (r for r in records if r.animal_id == animal.id), key=lambda r: r.weight_date
    )
    points: list[WeightPoint] = []
    previous: WeightRecord | None = None
    for record in history:
        age_months = (record.weight_date - animal.birth_date).days // DAYS_PER_MONTH
        gain_rate = 0.0
        if previous is not None:
            days = (record.weight_date - previous.weight_date).days
            if days > 0:
                gain_rate = (record.weight_kg - previous.weight_kg) / days * DAYS_PER_MONTH
        band = expected_weight_band(animal.breed, age_months)
        points.append(
            WeightPoint(
                date=record.weight_date,
                weight_kg=record.weight_kg,
                weight_change=record.weight_change or 0.0,
                age_months=age_months,
                gain_rate=gain_rate,
                band=band,
                status=band.classify(record.weight_kg),
                notes=record.notes,
            )
        )
        previous = record
    return points


@dataclass(slots=True)
class WeightTrendSummary:
    total_gain: float = 0.0
    average_monthly_gain: float = 0.0
    trend: str = "stable"  # gaining | losing | stable


def weight_trend_summary(points: Sequence[WeightPoint]) -> WeightTrendSummary:
    if len(points) < 2:
        return WeightTrendSummary()
    total_gain = points[-1].weight_kg - points[0].weight_kg
    total_days = (points[-1].date - points[0].date).days
    average = total_gain / total_days * DAYS_PER_MONTH if total_days > 0 else 0.0
    recent = points[-RECENT_POINTS:]
    recent_gain = recent[-1].weight_kg - recent[0].weight_kg
    trend = "stable"
    if abs(recent_gain) > TREND_THRESHOLD_KG:
        trend = "gaining" if recent_gain > 0 else "losing"
    return WeightTrendSummary(total_gain=total_gain, average_monthly_gain=average, trend=trend)


def previous_weight_for(history: Iterable[WeightRecord], weight_date: date) -> float | None:
    """Weight of the most recent record taken on or before `weight_date`."""
    candidates = [r for r in history if r.weight_date <= weight_date]
    if not candidates:
        return None
    return max(candidates, key=lambda r: r.weight_date).weight_kg


def reference_status(weight_kg: float, breed: str | None) -> str:
    """Compare a weighing with the adult reference range of its breed."""
    low, high = adult_weight_range(breed)
    if weight_kg < low:
        return "low"
    if weight_kg > high:
        return "high"
    return "normal"


def change_direction(change: float | None, *, threshold: float = 2.0) -> str:
    """Label for a weight change; changes under `threshold` kg count as stable."""
    if change is None or abs(change) < threshold:
        return "stable"
    return "up" if change > 0 else "down"
