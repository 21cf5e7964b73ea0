from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # la base stocke de l'UTC naïf : on rend le fuseau explicite en sortie
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _required_text(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("ne doit pas être vide")
    return value


# -------------------
# Examples
# -------------------
class Example(BaseModel):
    id: str
    text: str
    translation: str = ""


class ExampleIn(BaseModel):
    # id optionnel : attribué côté serveur si absent ou dupliqué
    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    translation: str = ""


# -------------------
# Cards (entrée)
# -------------------
class CardIn(BaseModel):
    word: str = Field(..., description="Mot / terme appris")
    translation: str = Field(..., description="Traduction dans la langue connue")
    examples: List[ExampleIn] = Field(default_factory=list)
    isKnown: bool = False
    lastReviewed: Optional[datetime] = None

    @field_validator("word", "translation")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _required_text(v)


class CardsCreateIn(BaseModel):
    cards: List[CardIn]
    userId: Optional[str] = None


class CardUpdateIn(BaseModel):
    """
    Mise à jour partielle : seuls les champs fournis sont fusionnés.
    Les champs inconnus (dont `id`) sont ignorés.
    """

    word: Optional[str] = None
    translation: Optional[str] = None
    examples: Optional[List[ExampleIn]] = None
    isKnown: Optional[bool] = None
    lastReviewed: Optional[datetime] = None

    @field_validator("word", "translation")
    @classmethod
    def _not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _required_text(v)


class RestoreCardIn(CardIn):
    createdAt: Optional[datetime] = None


class RestoreIn(BaseModel):
    version: Optional[str] = None
    exportDate: Optional[datetime] = None
    cards: List[RestoreCardIn]


# -------------------
# Cards (sortie)
# -------------------
class CardOut(BaseModel):
    id: str
    userId: str
    word: str
    translation: str
    examples: List[Example] = Field(default_factory=list)
    isKnown: bool = False
    lastReviewed: Optional[datetime] = None
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_row(cls, c) -> "CardOut":
        return cls(
            id=c.id,
            userId=c.user_id,
            word=c.word,
            translation=c.translation,
            examples=[Example(**e) for e in (c.examples or [])],
            isKnown=bool(c.is_known),
            lastReviewed=_as_utc(c.last_reviewed),
            createdAt=_as_utc(c.created_at),
            updatedAt=_as_utc(c.updated_at),
        )


class CardListResponse(BaseModel):
    success: bool = True
    data: List[CardOut]


class CardResponse(BaseModel):
    success: bool = True
    data: CardOut


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "Carte supprimée."


# -------------------
# Import / export / stats
# -------------------
class ImportResult(BaseModel):
    imported: int
    skipped: int
    cards: List[CardOut]


class ImportResponse(BaseModel):
    success: bool = True
    data: ImportResult


class ExportDocument(BaseModel):
    version: str = "1.0.0"
    exportDate: datetime
    totalCards: int
    knownCards: int
    cards: List[CardOut]


class DeckStats(BaseModel):
    total: int
    known: int
    learning: int
    completionRate: int = Field(..., ge=0, le=100)
    level: int
    title: str


class StatsResponse(BaseModel):
    success: bool = True
    data: DeckStats


class ResetResult(BaseModel):
    reset: int


class ResetResponse(BaseModel):
    success: bool = True
    data: ResetResult
