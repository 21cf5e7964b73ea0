import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.db import database
from app.routers import system, cards

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    # Base de données (tables créées au démarrage, pas de migrations en V1)
    database.configure(settings.DATABASE_URL)
    database.init_db()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API backend des cartes de vocabulaire (import, révision, recherche)",
    )

    # Middleware CORS
    origins = []
    if settings.CORS_ORIGINS:
        if isinstance(settings.CORS_ORIGINS, str):
            origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
        elif isinstance(settings.CORS_ORIGINS, list):
            origins = settings.CORS_ORIGINS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(cards.router)

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    logger.info("%s %s started (env=%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    return app


app = create_app()
