from __future__ import annotations

from datetime import date, timedelta

from herdbook.application.aggregation.herd import (
    HerdSummary,
    attention_list,
    herd_summary,
    needs_weight_check,
    upcoming_births,
)
from herdbook.domain.models.animal import Animal

TODAY = date(2024, 7, 10)


def make_animal(name: str, **overrides) -> Animal:
    fields = {
        "id": name.lower(),
        "name": name,
        "breed": "Holstein",
        "birth_date": date(2021, 3, 1),
        "sex": "female",
    }
    fields.update(overrides)
    return Animal(**fields)


def test_empty_herd_gives_zero_summary():
    summary = herd_summary([])
    assert summary == HerdSummary()
    assert summary.average_weight == 0
    assert upcoming_births([], TODAY) == []
    assert needs_weight_check([], TODAY) == []


def test_summary_counts_and_rounds_average_weight():
    herd = [
        make_animal("A", last_weight=400, today_milk=12.5, pregnancy_due_date=TODAY),
        make_animal("B", last_weight=451, today_milk=7.5, health_status="sick"),
    ]
    summary = herd_summary(herd)
    assert summary.total == 2
    assert summary.pregnant == 1
    assert summary.total_milk_today == 20.0
    assert summary.needing_attention == 1
    # 425.5 rounds half up
    assert summary.average_weight == 426
    assert summary.min_weight == 400
    assert summary.max_weight == 451


def test_upcoming_births_only_inside_window():
    herd = [
        make_animal("Soon", pregnancy_due_date=TODAY + timedelta(days=10)),
        make_animal("Later", pregnancy_due_date=TODAY + timedelta(days=31)),
        make_animal("Overdue", pregnancy_due_date=TODAY - timedelta(days=1)),
        make_animal("Open"),
    ]
    assert [a.name for a in upcoming_births(herd, TODAY)] == ["Soon"]


def test_needs_weight_check_threshold():
    herd = [
        make_animal("Due", last_weight_date=TODAY - timedelta(days=30)),
        make_animal("Recent", last_weight_date=TODAY - timedelta(days=29)),
        make_animal("Never", last_weight_date=None),
    ]
    assert [a.name for a in needs_weight_check(herd, TODAY)] == ["Due"]


def test_attention_list_excludes_healthy():
    herd = [
        make_animal("A"),
        make_animal("B", health_status="treatment"),
        make_animal("C", health_status="sick"),
    ]
    assert [a.name for a in attention_list(herd)] == ["B", "C"]
