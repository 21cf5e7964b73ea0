from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import get_settings


class Base(DeclarativeBase):
    pass


def _make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # TestClient / threadpool FastAPI : plusieurs threads sur la même connexion
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, future=True)


_url = get_settings().DATABASE_URL
engine = _make_engine(_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def configure(url: str) -> None:
    """
    Rebranche engine + SessionLocal sur une autre URL (tests, changement d'env).
    """
    global engine, _url
    if url == _url:
        return
    engine.dispose()
    engine = _make_engine(url)
    _url = url
    SessionLocal.configure(bind=engine)


def init_db() -> None:
    from app.db import models  # noqa: F401  (enregistre les tables sur Base)

    Base.metadata.create_all(bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
