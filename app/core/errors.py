import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)


class CardsError(Exception):
    """
    Erreur métier de base : porte le status HTTP et un message lisible.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Erreur interne."

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(CardsError):
    status_code = HTTP_400_BAD_REQUEST
    message = "Requête invalide."


class NotFoundError(CardsError):
    status_code = HTTP_404_NOT_FOUND
    message = "Carte introuvable."


class StoreError(CardsError):
    # le détail reste dans les logs, jamais dans la réponse
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message = "Erreur de stockage."


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Requête invalide."
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalide")
    return f"{loc}: {msg}" if loc else msg


def register_error_handlers(app: FastAPI) -> None:
    """
    Toutes les erreurs sortent sous la forme {success: false, error: "..."}.
    """

    @app.exception_handler(CardsError)
    async def cards_error_handler(request: Request, exc: CardsError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    # FastAPI renvoie 422 par défaut : on aligne sur 400
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content=error_body(_first_validation_message(exc)),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Erreur interne."),
        )
