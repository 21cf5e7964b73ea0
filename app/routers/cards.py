from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, Query

from app.core.deps import get_card_repository, get_owner_id
from app.models.cards import (
    CardsCreateIn, CardUpdateIn, RestoreIn,
    CardOut, CardListResponse, CardResponse, DeleteResponse,
    ImportResult, ImportResponse, ExportDocument,
    StatsResponse, ResetResult, ResetResponse,
)
from app.services.cards import CardRepository
from app.services.importer import parse_import, split_duplicates
from app.services.search import filter_cards
from app.services.study import deck_stats, export_document

router = APIRouter(prefix="/cards", tags=["cards"])


def _out(rows) -> List[CardOut]:
    return [CardOut.from_row(c) for c in rows]


# =========================================================
# Collection
# =========================================================
@router.get("", response_model=CardListResponse)
def list_cards(
    q: Optional[str] = Query(default=None, description="Filtre sous-chaîne (optionnel)"),
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    cards = _out(repo.list(owner_id))
    return CardListResponse(data=filter_cards(cards, q))


@router.post("", response_model=CardListResponse)
def create_cards(
    payload: CardsCreateIn,
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    owner = (payload.userId or "").strip() or owner_id
    rows = repo.create(owner, payload.cards)
    return CardListResponse(data=_out(rows))


# =========================================================
# Import / export / progression
# (déclarées avant /{card_id} pour ne pas être capturées)
# =========================================================
@router.post("/import", response_model=ImportResponse)
def import_cards(
    document: Union[Dict[str, Any], List[Any]] = Body(...),
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    parsed = parse_import(document)
    keep, skipped = split_duplicates(parsed, repo.existing_words(owner_id))
    rows = repo.create(owner_id, keep) if keep else []
    return ImportResponse(data=ImportResult(imported=len(rows), skipped=skipped, cards=_out(rows)))


@router.get("/export", response_model=ExportDocument)
def export_cards(
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    return export_document(_out(repo.list(owner_id)))


@router.post("/restore", response_model=CardListResponse)
def restore_cards(
    payload: RestoreIn,
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    repo.replace_all(owner_id, payload.cards)
    return CardListResponse(data=_out(repo.list(owner_id)))


@router.post("/reset", response_model=ResetResponse)
def reset_progress(
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    return ResetResponse(data=ResetResult(reset=repo.reset_progress(owner_id)))


@router.get("/stats", response_model=StatsResponse)
def stats(
    owner_id: str = Depends(get_owner_id),
    repo: CardRepository = Depends(get_card_repository),
):
    return StatsResponse(data=deck_stats(_out(repo.list(owner_id))))


# =========================================================
# Carte unique
# =========================================================
@router.get("/{card_id}", response_model=CardResponse)
def get_card(card_id: str, repo: CardRepository = Depends(get_card_repository)):
    return CardResponse(data=CardOut.from_row(repo.get(card_id)))


@router.put("/{card_id}", response_model=CardResponse)
def update_card(
    card_id: str,
    payload: CardUpdateIn,
    repo: CardRepository = Depends(get_card_repository),
):
    c = repo.update(card_id, payload.model_dump(exclude_unset=True))
    return CardResponse(data=CardOut.from_row(c))


@router.delete("/{card_id}", response_model=DeleteResponse)
def delete_card(card_id: str, repo: CardRepository = Depends(get_card_repository)):
    repo.delete(card_id)
    return DeleteResponse(message="Carte supprimée.")
