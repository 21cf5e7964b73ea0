import pytest
from sqlalchemy.exc import OperationalError

from app.core.deps import get_card_repository
from app.core.errors import NotFoundError, StoreError
from app.models.cards import CardIn


def test_create_assigns_ids_and_timestamps(repo):
    rows = repo.create("default_user", [CardIn(word="casa", translation="house")])
    c = rows[0]
    assert c.id and len(c.id) == 32
    assert c.created_at is not None and c.updated_at is not None
    assert c.is_known is False
    assert c.last_reviewed is None


def test_batch_keeps_insertion_order_newest_first(repo):
    repo.create("u", [CardIn(word=w, translation="t") for w in ("a", "b", "c")])
    assert [c.word for c in repo.list("u")] == ["c", "b", "a"]


def test_delete_then_delete_again(repo):
    c = repo.create("u", [CardIn(word="x", translation="y")])[0]
    repo.delete(c.id)
    with pytest.raises(NotFoundError):
        repo.delete(c.id)


def test_update_missing_card(repo):
    with pytest.raises(NotFoundError):
        repo.update("missing", {"isKnown": True})


def test_store_failure_becomes_store_error(repo, monkeypatch):
    def boom():
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(repo.db, "commit", boom)
    with pytest.raises(StoreError):
        repo.create("u", [CardIn(word="x", translation="y")])


def test_store_failure_is_a_generic_500(test_client):
    class FailingRepo:
        def list(self, owner_id):
            raise StoreError()

    test_client.app.dependency_overrides[get_card_repository] = lambda: FailingRepo()
    try:
        r = test_client.get("/cards")
    finally:
        test_client.app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Erreur de stockage."}


def test_owner_is_always_the_one_passed_in(repo):
    c = repo.create("alice", [CardIn(word="x", translation="y")])[0]
    assert c.user_id == "alice"
    assert repo.list("default_user") == []
