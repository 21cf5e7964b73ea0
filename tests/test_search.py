from datetime import datetime

from app.models.cards import CardOut, Example
from app.services.search import SearchDebouncer, filter_cards


def _card(i, word, translation, examples=()):
    now = datetime(2024, 1, 1)
    return CardOut(
        id=str(i), userId="default_user", word=word, translation=translation,
        examples=[Example(id=f"e{j}", text=t, translation=tr) for j, (t, tr) in enumerate(examples)],
        createdAt=now, updatedAt=now,
    )


CARDS = [
    _card(1, "hello", "hola"),
    _card(2, "house", "casa", [("My house is big", "Mi casa es grande")]),
    _card(3, "dog", "perro", [("The dog barks", "El perro ladra")]),
]


def test_empty_query_returns_list_unchanged():
    assert filter_cards(CARDS, "") == CARDS
    assert filter_cards(CARDS, "   ") == CARDS
    assert filter_cards(CARDS, None) == CARDS


def test_case_insensitive_word_match():
    assert [c.id for c in filter_cards(CARDS, "HELLO")] == ["1"]


def test_matches_translation_and_examples():
    assert [c.id for c in filter_cards(CARDS, "perro")] == ["3"]
    assert [c.id for c in filter_cards(CARDS, "GRANDE")] == ["2"]
    assert [c.id for c in filter_cards(CARDS, "barks")] == ["3"]


def test_substring_keeps_original_order():
    assert [c.id for c in filter_cards(CARDS, "o")] == ["1", "2", "3"]
    assert filter_cards(CARDS, "zzz") == []


def test_debouncer_waits_for_quiet_period():
    now = [0.0]
    d = SearchDebouncer(delay_ms=300, clock=lambda: now[0])

    d.type("h")
    now[0] = 0.1
    d.type("hel")
    now[0] = 0.3
    assert d.poll() is None  # 200ms depuis la dernière frappe
    assert d.pending

    now[0] = 0.45
    assert d.poll() == "hel"
    assert not d.pending
    assert d.poll() is None
    assert [c.id for c in d.apply(CARDS)] == ["1"]


def test_debouncer_flush_applies_latest_query():
    d = SearchDebouncer(delay_ms=10_000)
    d.type("dog")
    assert d.apply(CARDS) == CARDS
    assert d.flush() == "dog"
    assert [c.id for c in d.apply(CARDS)] == ["3"]
