from __future__ import annotations

from datetime import date, timedelta

from herdbook.application.aggregation.cattle import (
    age_in_months,
    age_label,
    breed_options,
    cattle_card,
    days_until_birth,
    filter_cattle,
    is_birth_upcoming,
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


def test_search_matches_name_or_breed_case_insensitive():
    herd = [
        make_animal("Bella"),
        make_animal("Luna", breed="Jersey"),
        make_animal("Rosa", breed="Angus"),
    ]
    assert [a.name for a in filter_cattle(herd, search="JER")] == ["Luna"]
    assert [a.name for a in filter_cattle(herd, search="ros")] == ["Rosa"]


def test_search_ignores_accents():
    herd = [make_animal("María"), make_animal("Luna")]
    assert [a.name for a in filter_cattle(herd, search="maria")] == ["María"]
    assert [a.name for a in filter_cattle(herd, search="MARÍA")] == ["María"]


def test_breed_and_health_filters_combine():
    herd = [
        make_animal("Bella", health_status="sick"),
        make_animal("Luna", breed="Jersey", health_status="sick"),
        make_animal("Rosa"),
    ]
    result = filter_cattle(herd, breed="Holstein", health_status="sick")
    assert [a.name for a in result] == ["Bella"]


def test_name_sort_ignores_accents_and_case():
    herd = [make_animal("Zoe"), make_animal("bella"), make_animal("Ángela")]
    assert [a.name for a in filter_cattle(herd, sort_by="name")] == ["Ángela", "bella", "Zoe"]


def test_sort_by_age_production_and_weight():
    herd = [
        make_animal("A", birth_date=date(2022, 1, 1), today_milk=10, last_weight=500),
        make_animal("B", birth_date=date(2020, 1, 1), today_milk=30, last_weight=450),
        make_animal("C", birth_date=date(2021, 1, 1), today_milk=20, last_weight=600),
    ]
    assert [a.name for a in filter_cattle(herd, sort_by="age")] == ["B", "C", "A"]
    assert [a.name for a in filter_cattle(herd, sort_by="production")] == ["B", "C", "A"]
    assert [a.name for a in filter_cattle(herd, sort_by="weight")] == ["C", "A", "B"]


def test_unknown_sort_keeps_input_order():
    herd = [make_animal("Zoe"), make_animal("Ana")]
    assert [a.name for a in filter_cattle(herd, sort_by="color")] == ["Zoe", "Ana"]


def test_breed_options_come_from_whole_collection():
    herd = [make_animal("A"), make_animal("B", breed="Jersey"), make_animal("C")]
    assert breed_options(herd) == ["Holstein", "Jersey"]


def test_age_labels():
    assert age_in_months(date(2024, 1, 15), TODAY) == 6
    assert age_label(date(2024, 1, 15), TODAY) == "6m"
    assert age_in_months(date(2021, 3, 1), TODAY) == 40
    assert age_label(date(2021, 3, 1), TODAY) == "3a"


def test_upcoming_birth_window():
    assert days_until_birth(TODAY + timedelta(days=10), TODAY) == 10
    assert is_birth_upcoming(TODAY + timedelta(days=10), TODAY)
    assert is_birth_upcoming(TODAY + timedelta(days=30), TODAY)
    assert not is_birth_upcoming(TODAY + timedelta(days=31), TODAY)
    assert not is_birth_upcoming(TODAY - timedelta(days=1), TODAY)
    assert not is_birth_upcoming(TODAY, TODAY)
    assert not is_birth_upcoming(None, TODAY)


def test_cattle_card_for_non_pregnant_animal():
    card = cattle_card(make_animal("Bella"), TODAY)
    assert card.days_until_birth is None
    assert card.birth_upcoming is False
    assert card.age_label == "3a"
