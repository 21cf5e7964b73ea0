from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import List, Literal, Optional, Sequence

from app.models.cards import CardOut, DeckStats, ExportDocument

EXPORT_VERSION = "1.0.0"

Direction = Literal["next", "prev"]

# (seuil exclusif de mots connus, niveau, titre)
LEVELS = [
    (5, 1, "Beginner"),
    (15, 2, "Learner"),
    (30, 3, "Student"),
    (50, 4, "Scholar"),
    (100, 5, "Expert"),
]
TOP_LEVEL = (6, "Master")


def active_cards(cards: Sequence[CardOut], include_known: bool = False) -> List[CardOut]:
    if include_known:
        return list(cards)
    return [c for c in cards if not c.isKnown]


def shuffled(cards: Sequence[CardOut], rng: Optional[random.Random] = None) -> List[CardOut]:
    """
    Copie mélangée, la liste d'origine n'est pas modifiée.
    """
    rng = rng or random.Random()
    out = list(cards)
    rng.shuffle(out)
    return out


def find_next_index(
    cards: Sequence[CardOut],
    current: int,
    direction: Direction = "next",
    include_known: bool = False,
) -> int:
    """
    Cherche, en bouclant, la prochaine carte valide (non connue sauf si include_known).
    Reste sur `current` si aucune carte ne convient.
    """
    if not cards:
        return 0

    n = len(cards)
    idx = current
    for _ in range(n):
        if direction == "next":
            idx = idx + 1 if idx < n - 1 else 0
        else:
            idx = idx - 1 if idx > 0 else n - 1
        if include_known or not cards[idx].isKnown:
            return idx
    return current


def level_for(known: int) -> tuple[int, str]:
    for threshold, level, title in LEVELS:
        if known < threshold:
            return level, title
    return TOP_LEVEL


def deck_stats(cards: Sequence[CardOut]) -> DeckStats:
    total = len(cards)
    known = sum(1 for c in cards if c.isKnown)
    rate = round(known / total * 100) if total else 0
    level, title = level_for(known)
    return DeckStats(
        total=total,
        known=known,
        learning=total - known,
        completionRate=int(rate),
        level=level,
        title=title,
    )


def export_document(cards: Sequence[CardOut]) -> ExportDocument:
    return ExportDocument(
        version=EXPORT_VERSION,
        exportDate=datetime.now(timezone.utc),
        totalCards=len(cards),
        knownCards=sum(1 for c in cards if c.isKnown),
        cards=list(cards),
    )
