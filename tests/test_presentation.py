from datetime import datetime

from app.models.cards import CardOut
from app.services.presentation import CardView, ClickTarget, Face, MenuAction, MenuState


def _card(known=False):
    now = datetime(2024, 1, 1)
    return CardOut(id="c1", userId="default_user", word="casa", translation="house",
                   isKnown=known, createdAt=now, updatedAt=now)


def test_starts_on_front_showing_word():
    v = CardView(_card())
    assert v.face == Face.front
    assert v.visible_text == "casa"


def test_flip_twice_returns_to_original_face():
    v = CardView(_card())
    assert v.flip() == Face.back
    assert v.visible_text == "house"
    assert v.flip() == Face.front


def test_click_on_nested_control_does_not_flip():
    v = CardView(_card())
    assert v.click(ClickTarget.control) == Face.front
    assert v.click(ClickTarget.body) == Face.back


def test_marking_resets_face_to_front():
    v = CardView(_card())
    v.flip()
    update = v.mark_known()
    assert v.face == Face.front
    assert update.isKnown is True
    assert v.card.isKnown is True

    v.flip()
    update = v.mark_unknown()
    assert v.face == Face.front
    assert update.model_dump(exclude_unset=True) == {"isKnown": False}


def test_show_translation_first_swaps_sides():
    v = CardView(_card(), show_translation_first=True)
    assert v.visible_text == "house"
    v.flip()
    assert v.visible_text == "casa"


def test_only_one_menu_open():
    m = MenuState()
    m.open("a", (10, 20))
    assert m.is_open("a")

    m.open("b", (5, 5))
    assert not m.is_open("a")
    assert m.is_open("b")
    assert m.current.anchor == (5, 5)


def test_choose_closes_menu():
    m = MenuState()
    assert m.choose(MenuAction.edit) is None

    m.open("a")
    assert m.choose(MenuAction.delete) == (MenuAction.delete, "a")
    assert not m.is_open()
