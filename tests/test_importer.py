import pytest

from app.core.errors import ValidationError
from app.models.cards import CardIn
from app.services.importer import parse_import, split_duplicates


def test_parse_mapping():
    cards = parse_import({"hello": "hola", "thank you": "gracias"})
    assert [(c.word, c.translation) for c in cards] == [("hello", "hola"), ("thank you", "gracias")]
    assert all(not c.isKnown for c in cards)


def test_parse_array_keeps_examples():
    cards = parse_import([{"word": "eat", "translation": "comer",
                           "examples": [{"id": "x", "text": "I eat", "translation": "Yo como"}]}])
    assert cards[0].examples[0].id == "x"


def test_parse_legacy_example_fields():
    cards = parse_import([{"word": "run", "translation": "correr", "example": "I run"}])
    assert cards[0].examples[0].text == "I run"
    assert cards[0].examples[0].translation == ""


@pytest.mark.parametrize("doc", [
    "hello",
    42,
    {"hello": 1},
    [{"word": "x"}],
    ["hello"],
    [{"word": " ", "translation": "vide"}],
])
def test_parse_rejects_invalid(doc):
    with pytest.raises(ValidationError):
        parse_import(doc)


def test_split_duplicates():
    cards = [CardIn(word=w, translation="t") for w in ("Hello", "cat", "hello ", "dog")]
    keep, skipped = split_duplicates(cards, {"dog"})
    assert [c.word for c in keep] == ["Hello", "cat"]
    assert skipped == 2
