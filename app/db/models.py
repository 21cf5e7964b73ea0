from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Boolean, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base


def utcnow() -> datetime:
    # stockage en UTC naïf (SQLite ne garde pas le fuseau)
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex


# ============================================================
# CARDS
# ============================================================


class Card(Base):
    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)

    word: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    translation: Mapped[str] = mapped_column(Text, nullable=False)

    # [{"id": "...", "text": "...", "translation": "..."}]
    examples: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    is_known: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    last_reviewed: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
