from __future__ import annotations

import unicodedata

ALL = "all"


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def matches_search(term: str | None, *fields: str | None) -> bool:
    """Case- and accent-insensitive substring match of `term` against any of `fields`."""
    if not term:
        return True
    needle = _fold(term)
    return any(needle in _fold(value or "") for value in fields)


def matches_choice(selected: str | None, value: str | None) -> bool:
    """Equality filter where None or "all" disables the filter."""
    return selected in (None, "", ALL) or selected == value


def collation_key(value: str | None) -> tuple[str, str]:
    """Sort key approximating a locale-aware comparison.

    Accents and case are ignored first; the original text breaks ties so the
    order stays deterministic.
    """
    text = value or ""
    return (_fold(text), text)


def mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0
