from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.models.cards import CardIn
from app.utils.text_utils import word_key

logger = logging.getLogger(__name__)

IMPORT_FIELDS = ("word", "translation", "examples")


def _from_mapping(doc: Dict[str, Any]) -> List[Dict[str, Any]]:
    # format simple : {"hello": "hola", ...}
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in doc.items()):
        raise ValidationError("Toutes les clés et valeurs doivent être des chaînes (paires mot-traduction).")
    return [{"word": k, "translation": v} for k, v in doc.items()]


def _from_array(doc: List[Any]) -> List[Dict[str, Any]]:
    items = []
    for item in doc:
        if not isinstance(item, dict) or not isinstance(item.get("word"), str) or not isinstance(item.get("translation"), str):
            raise ValidationError('Chaque élément doit avoir "word" et "translation" (chaînes).')
        entry = dict(item)

        # ancien format : un seul exemple à plat
        legacy = entry.pop("example", None)
        legacy_tr = entry.pop("exampleTranslation", None)
        if legacy and not entry.get("examples"):
            entry["examples"] = [{"text": legacy, "translation": legacy_tr or ""}]

        items.append(entry)
    return items


def parse_import(document: Any) -> List[CardIn]:
    """
    Accepte un objet {mot: traduction} ou un tableau [{word, translation, examples?}].
    Tout autre format est rejeté en bloc.
    """
    if isinstance(document, list):
        raw = _from_array(document)
    elif isinstance(document, dict):
        raw = _from_mapping(document)
    else:
        raise ValidationError("Le JSON doit être un objet mot-traduction ou un tableau de cartes.")

    cards: List[CardIn] = []
    for i, entry in enumerate(raw):
        # un import crée toujours des mots à apprendre : la progression passe par /cards/restore
        fields = {k: entry[k] for k in IMPORT_FIELDS if k in entry}
        try:
            cards.append(CardIn.model_validate(fields))
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ()))
            raise ValidationError(f"Élément {i}: {field}: {first.get('msg', 'invalide')}")
    return cards


def split_duplicates(cards: List[CardIn], existing: Optional[Set[str]] = None) -> Tuple[List[CardIn], int]:
    """
    Écarte les mots déjà présents dans le deck (ou déjà vus plus haut dans l'import).
    Retourne (cartes à insérer, nombre ignoré).
    """
    seen = set(existing or ())
    keep: List[CardIn] = []
    skipped = 0
    for c in cards:
        key = word_key(c.word)
        if key in seen:
            skipped += 1
            continue
        seen.add(key)
        keep.append(c)
    if skipped:
        logger.info("Import: %d duplicate word(s) skipped", skipped)
    return keep, skipped
