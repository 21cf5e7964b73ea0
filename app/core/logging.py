import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logging racine (stdout). Appelé une fois par create_app().
    """
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(lvl)

    # pas de doublon de handlers si create_app() est appelé plusieurs fois (tests)
    if not any(getattr(h, "_cards_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._cards_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # uvicorn garde ses propres handlers, on aligne juste le niveau
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(lvl)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
