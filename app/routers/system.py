import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


def check_store(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
        return "ok"
    except SQLAlchemyError as e:
        logger.warning("Health check: store unreachable (%s)", e)
        return "unavailable"


@router.get("/health")
def health(db: Session = Depends(get_db)):
    s = get_settings()
    store = check_store(db)
    return {
        "status": "ok" if store == "ok" else "degraded",
        "db": store,
        "version": s.APP_VERSION,
    }

@router.get("/version")
def version():
    s = get_settings()
    return {"name": s.APP_NAME, "version": s.APP_VERSION, "env": s.APP_ENV}
