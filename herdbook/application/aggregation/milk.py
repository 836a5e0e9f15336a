from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

from herdbook.application.aggregation.search import (
    collation_key,
    matches_choice,
    matches_search,
    mean,
)
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.milk_record import MilkRecord

# Lower bound of each date bucket, in days before today
MILK_DATE_RANGES: dict[str, int | None] = {
    "all": None,
    "today": 0,
    "last-7-days": 7,
    "last-30-days": 30,
}

_SORTS = {
    "date-desc": (lambda r: r.production_date, True),
    "date-asc": (lambda r: r.production_date, False),
    "total-desc": (lambda r: r.total_liters, True),
    "total-asc": (lambda r: r.total_liters, False),
    "animal": (lambda r: collation_key(r.animal_name), False),
}

TREND_THRESHOLD_PERCENT = 5.0


def _in_range(date_range: str, record_date: date, today: date) -> bool:
    if date_range == "today":
        return record_date == today
    days = MILK_DATE_RANGES.get(date_range)
    if days is None:
        return True
    return record_date >= today - timedelta(days=days)


def filter_milk_records(
    records: Iterable[MilkRecord],
    *,
    today: date,
    search: str | None = None,
    animal_id: str | None = "all",
    date_range: str = "all",
    sort_by: str = "date-desc",
) -> list[MilkRecord]:
    selected = [
        r
        for r in records
        if matches_search(search, r.animal_name, r.animal_breed)
        and matches_choice(animal_id, r.animal_id)
        and _in_range(date_range, r.production_date, today)
    ]
    sort = _SORTS.get(sort_by)
    if sort is None:
        return selected
    key, reverse = sort
    return sorted(selected, key=key, reverse=reverse)


@dataclass(slots=True)
class MilkStatistics:
    record_count: int
    total_liters: float
    average_liters: float
    max_liters: float
    min_liters: float
    trend: float


def milk_statistics(records: Sequence[MilkRecord]) -> MilkStatistics | None:
    """Totals over an already filtered and sorted sequence; None when empty.

    `trend` is the mean of the second half minus the mean of the first half,
    split at len // 2, so its sign depends on the current sort order.
    """
    if not records:
        return None
    totals = [r.total_liters for r in records]
    midpoint = len(totals) // 2
    first_half, second_half = totals[:midpoint], totals[midpoint:]
    trend = mean(second_half) - mean(first_half) if first_half else 0.0
    return MilkStatistics(
        record_count=len(totals),
        total_liters=sum(totals),
        average_liters=sum(totals) / len(totals),
        max_liters=max(totals),
        min_liters=min(totals),
        trend=trend,
    )


def merge_milk_entry(existing: MilkRecord, entry: MilkRecord) -> MilkRecord:
    """Fold a new entry for the same animal and day into the stored record.

    Shift liters are added, the total is recomputed and the notes are only
    replaced when the new entry brings some.
    """
    merged = replace(
        existing,
        morning_liters=(existing.morning_liters or 0.0) + (entry.morning_liters or 0.0),
        afternoon_liters=(existing.afternoon_liters or 0.0) + (entry.afternoon_liters or 0.0),
        evening_liters=(existing.evening_liters or 0.0) + (entry.evening_liters or 0.0),
        notes=entry.notes or existing.notes or "",
    )
    merged.recompute_total()
    return merged


@dataclass(slots=True)
class DailyMilkPoint:
    date: date
    total_liters: float = 0.0
    morning_liters: float = 0.0
    afternoon_liters: float = 0.0
    evening_liters: float = 0.0
    # Herd-wide series
    animal_count: int = 0
    average_liters: float = 0.0
    # Single-animal series
    animal_name: str | None = None
    reference_average: float | None = None


def daily_milk_series(
    records: Iterable[MilkRecord],
    *,
    days: int,
    today: date,
    animal_id: str | None = None,
    animals: Iterable[Animal] = (),
) -> list[DailyMilkPoint]:
    """One point per calendar day for the `days` days ending today.

    Without `animal_id` each point aggregates the whole herd; with it the
    point carries that animal's record for the day (zeros when missing).
    """
    by_day: dict[date, list[MilkRecord]] = {}
    for record in records:
        by_day.setdefault(record.production_date, []).append(record)
    animal = None
    if animal_id not in (None, "", "all"):
        animal = next((a for a in animals if a.id == animal_id), None)

    series: list[DailyMilkPoint] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_records = by_day.get(day, [])
        if animal_id in (None, "", "all"):
            total = sum(r.total_liters for r in day_records)
            count = len({r.animal_id for r in day_records})
            series.append(
                DailyMilkPoint(
                    date=day,
                    total_liters=total,
                    morning_liters=sum(r.morning_liters for r in day_records),
                    afternoon_liters=sum(r.afternoon_liters for r in day_records),
                    evening_liters=sum(r.evening_liters for r in day_records),
                    animal_count=count,
                    average_liters=total / count if count > 0 else 0.0,
                )
            )
            continue
        record = next((r for r in day_records if r.animal_id == animal_id), None)
        series.append(
            DailyMilkPoint(
                date=day,
                total_liters=record.total_liters if record else 0.0,
                morning_liters=record.morning_liters if record else 0.0,
                afternoon_liters=record.afternoon_liters if record else 0.0,
                evening_liters=record.evening_liters if record else 0.0,
                animal_count=1 if record else 0,
                average_liters=record.total_liters if record else 0.0,
                animal_name=animal.name if animal else "",
                reference_average=animal.average_milk if animal else 0.0,
            )
        )
    return series


@dataclass(slots=True)
class DailyTrend:
    direction: str  # up | down | stable
    change: float
    percentage: float


def daily_trend(series: Sequence[DailyMilkPoint]) -> DailyTrend:
    """Last three days against the three before them."""
    if len(series) < 2:
        return DailyTrend(direction="stable", change=0.0, percentage=0.0)
    recent = sum(p.total_liters for p in series[-3:]) / 3
    previous = sum(p.total_liters for p in series[-6:-3]) / 3
    if previous == 0:
        return DailyTrend(direction="stable", change=0.0, percentage=0.0)
    change = recent - previous
    percentage = change / previous * 100
    direction = "stable"
    if abs(percentage) > TREND_THRESHOLD_PERCENT:
        direction = "up" if percentage > 0 else "down"
    return DailyTrend(direction=direction, change=change, percentage=percentage)


@dataclass(slots=True)
class SeriesSummary:
    total_liters: float = 0.0
    average_daily: float = 0.0
    max_liters: float = 0.0
    min_liters: float = 0.0


def series_summary(series: Sequence[DailyMilkPoint]) -> SeriesSummary:
    if not series:
        return SeriesSummary()
    totals = [p.total_liters for p in series]
    return SeriesSummary(
        total_liters=sum(totals),
        average_daily=sum(totals) / len(totals),
        max_liters=max(totals),
        min_liters=min(totals),
    )
