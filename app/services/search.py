import time
from typing import Callable, List, Optional, Sequence

from app.models.cards import CardOut
from app.utils.text_utils import fold


def _matches(card: CardOut, needle: str) -> bool:
    if needle in fold(card.word) or needle in fold(card.translation):
        return True
    return any(needle in fold(ex.text) or needle in fold(ex.translation) for ex in card.examples)


def filter_cards(cards: Sequence[CardOut], query: Optional[str]) -> List[CardOut]:
    """
    Sous-séquence des cartes dont le mot, la traduction ou un exemple contient
    `query` (sous-chaîne, insensible à la casse). Requête vide = liste inchangée.
    """
    needle = fold((query or "").strip())
    if not needle:
        return list(cards)
    return [c for c in cards if _matches(c, needle)]


class SearchDebouncer:
    """
    Retient la dernière saisie et ne la rend effective qu'après `delay_ms`
    sans nouvelle frappe. Le filtrage reste synchrone côté appelant.
    """

    def __init__(self, delay_ms: int = 300, clock: Callable[[], float] = time.monotonic):
        self.delay = max(0, delay_ms) / 1000.0
        self._clock = clock
        self._pending: Optional[str] = None
        self._last_input_at: float = 0.0
        self.query: str = ""

    def type(self, text: str) -> None:
        self._pending = text
        self._last_input_at = self._clock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def poll(self) -> Optional[str]:
        """
        Renvoie la nouvelle requête effective si le délai est écoulé, sinon None.
        """
        if self._pending is None:
            return None
        if self._clock() - self._last_input_at < self.delay:
            return None
        return self.flush()

    def flush(self) -> str:
        if self._pending is not None:
            self.query = self._pending
            self._pending = None
        return self.query

    def apply(self, cards: Sequence[CardOut]) -> List[CardOut]:
        return filter_cards(cards, self.query)
