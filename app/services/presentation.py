from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from app.models.cards import CardOut, CardUpdateIn


class Face(str, Enum):
    front = "front"  # côté question
    back = "back"    # côté réponse


class ClickTarget(str, Enum):
    body = "body"
    control = "control"  # boutons imbriqués : ne retournent pas la carte


class MenuAction(str, Enum):
    edit = "edit"
    delete = "delete"


class CardView:
    """
    État d'affichage d'une carte : face visible + sens de lecture.
    """

    def __init__(self, card: CardOut, show_translation_first: bool = False):
        self.card = card
        self.show_translation_first = show_translation_first
        self.face = Face.front

    @property
    def prompt(self) -> str:
        return self.card.translation if self.show_translation_first else self.card.word

    @property
    def answer(self) -> str:
        return self.card.word if self.show_translation_first else self.card.translation

    @property
    def visible_text(self) -> str:
        return self.prompt if self.face == Face.front else self.answer

    def flip(self) -> Face:
        self.face = Face.back if self.face == Face.front else Face.front
        return self.face

    def click(self, target: ClickTarget = ClickTarget.body) -> Face:
        if target == ClickTarget.body:
            self.flip()
        return self.face

    def reset(self) -> None:
        self.face = Face.front

    def mark_known(self) -> CardUpdateIn:
        return self._mark(True)

    def mark_unknown(self) -> CardUpdateIn:
        return self._mark(False)

    def _mark(self, known: bool) -> CardUpdateIn:
        # la carte revient toujours face question après la décision
        self.reset()
        self.card = self.card.model_copy(update={"isKnown": known})
        return CardUpdateIn(isKnown=known)


@dataclass
class OpenMenu:
    card_id: str
    anchor: Tuple[int, int]


class MenuState:
    """
    Un seul menu contextuel ouvert à la fois.
    """

    def __init__(self) -> None:
        self.current: Optional[OpenMenu] = None

    def open(self, card_id: str, anchor: Tuple[int, int] = (0, 0)) -> OpenMenu:
        self.current = OpenMenu(card_id=card_id, anchor=anchor)
        return self.current

    def close(self) -> None:
        self.current = None

    def is_open(self, card_id: Optional[str] = None) -> bool:
        if self.current is None:
            return False
        return card_id is None or self.current.card_id == card_id

    def choose(self, action: MenuAction) -> Optional[Tuple[MenuAction, str]]:
        """
        Ferme le menu et renvoie (action, card_id), ou None si aucun menu n'est ouvert.
        """
        if self.current is None:
            return None
        card_id = self.current.card_id
        self.close()
        return action, card_id
