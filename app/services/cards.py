from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StoreError
from app.db.models import Card, utcnow
from app.models.cards import CardIn, ExampleIn, RestoreCardIn
from app.utils.text_utils import word_key

logger = logging.getLogger(__name__)


# =========================================================
# Helpers
# =========================================================
def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def stamps(count: int) -> List[datetime]:
    """
    Horodatages strictement croissants pour un lot (tri createdAt stable).
    """
    out: List[datetime] = []
    for _ in range(count):
        now = utcnow()
        if out and now <= out[-1]:
            now = out[-1] + timedelta(microseconds=1)
        out.append(now)
    return out


def normalize_examples(examples: Iterable[ExampleIn]) -> List[Dict[str, str]]:
    """
    Garantit un id unique (dans la carte) pour chaque exemple, utilisé comme clé d'affichage.
    """
    seen: Set[str] = set()
    out: List[Dict[str, str]] = []
    for ex in examples:
        ex_id = (ex.id or "").strip()
        while not ex_id or ex_id in seen:
            ex_id = uuid.uuid4().hex[:8]
        seen.add(ex_id)
        out.append({"id": ex_id, "text": ex.text, "translation": ex.translation})
    return out


class CardRepository:
    """
    Accès CRUD à la collection `cards`.
    Aucune transaction multi-documents : chaque écriture est commitée seule,
    la dernière écriture gagne.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------- internes ----------

    @contextmanager
    def _store(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Store failure while trying to %s", action)
            raise StoreError()

    def _build(self, owner_id: str, data: CardIn, now: datetime) -> Card:
        return Card(
            user_id=owner_id,
            word=data.word,
            translation=data.translation,
            examples=normalize_examples(data.examples),
            is_known=bool(data.isKnown),
            last_reviewed=to_utc_naive(data.lastReviewed),
            created_at=now,
            updated_at=now,
        )

    # ---------- lecture ----------

    def list(self, owner_id: str) -> List[Card]:
        with self._store("list cards"):
            stmt = select(Card).where(Card.user_id == owner_id).order_by(Card.created_at.desc())
            return list(self.db.execute(stmt).scalars().all())

    def get(self, card_id: str) -> Card:
        with self._store("fetch card"):
            c = self.db.execute(select(Card).where(Card.id == card_id)).scalar_one_or_none()
        if not c:
            raise NotFoundError()
        return c

    def existing_words(self, owner_id: str) -> Set[str]:
        with self._store("list words"):
            rows = self.db.execute(select(Card.word).where(Card.user_id == owner_id)).scalars().all()
        return {word_key(w) for w in rows}

    # ---------- écriture ----------

    def create(self, owner_id: str, cards: Sequence[CardIn]) -> List[Card]:
        """
        Insère le lot en une fois. Pas de rapport par élément en cas d'échec partiel.
        """
        rows = []
        with self._store("create cards"):
            for data, now in zip(cards, stamps(len(cards))):
                rows.append(self._build(owner_id, data, now))
            self.db.add_all(rows)
            self.db.commit()
            for c in rows:
                self.db.refresh(c)
        logger.info("Created %d card(s) for %s", len(rows), owner_id)
        return rows

    def update(self, card_id: str, fields: Dict[str, Any]) -> Card:
        """
        Fusionne les champs fournis. `lastReviewed` est horodaté à maintenant
        s'il n'est pas fourni explicitement (toute mise à jour compte comme une révision).
        """
        c = self.get(card_id)

        with self._store("update card"):
            if fields.get("word") is not None:
                c.word = fields["word"]
            if fields.get("translation") is not None:
                c.translation = fields["translation"]
            if fields.get("examples") is not None:
                c.examples = normalize_examples(
                    ex if isinstance(ex, ExampleIn) else ExampleIn(**ex) for ex in fields["examples"]
                )
            if fields.get("isKnown") is not None:
                c.is_known = bool(fields["isKnown"])

            reviewed = to_utc_naive(fields.get("lastReviewed"))
            c.last_reviewed = reviewed or utcnow()
            # onupdate ne se déclenche pas si rien d'autre ne change
            c.updated_at = utcnow()

            self.db.commit()
            self.db.refresh(c)
        return c

    def delete(self, card_id: str) -> None:
        c = self.get(card_id)
        with self._store("delete card"):
            self.db.delete(c)
            self.db.commit()
        logger.info("Deleted card %s", card_id)

    def reset_progress(self, owner_id: str) -> int:
        with self._store("reset progress"):
            res = self.db.execute(
                update(Card)
                .where(Card.user_id == owner_id, Card.is_known.is_(True))
                .values(is_known=False, updated_at=utcnow())
            )
            self.db.commit()
        count = int(res.rowcount or 0)
        logger.info("Reset %d known card(s) for %s", count, owner_id)
        return count

    def replace_all(self, owner_id: str, cards: Sequence[RestoreCardIn]) -> List[Card]:
        """
        Remplace le deck entier (restauration d'un export). Conserve isKnown,
        lastReviewed et createdAt quand ils sont fournis.
        """
        rows = []
        with self._store("restore deck"):
            self.db.execute(delete(Card).where(Card.user_id == owner_id))
            for data, now in zip(cards, stamps(len(cards))):
                c = self._build(owner_id, data, now)
                if data.createdAt is not None:
                    c.created_at = to_utc_naive(data.createdAt)
                rows.append(c)
            self.db.add_all(rows)
            self.db.commit()
            for c in rows:
                self.db.refresh(c)
        logger.info("Restored %d card(s) for %s", len(rows), owner_id)
        return rows
