from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.database import get_db
from app.services.cards import CardRepository


def get_card_repository(db: Session = Depends(get_db)) -> CardRepository:
    """
    Fournit le repository des cartes en dépendance (DI), une session par requête.
    """
    return CardRepository(db)


def get_owner_id(userId: Optional[str] = Query(default=None, description="Deck ciblé")) -> str:
    # pas d'authentification : un identifiant fixe sert de partition par défaut
    return (userId or "").strip() or get_settings().DEFAULT_USER_ID
