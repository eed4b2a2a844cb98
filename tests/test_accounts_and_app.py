"""Account service and app-level session wiring tests."""

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.errors import AuthenticationFailed, UsernameTaken
from memory.accounts import USERS_KEY, AccountService
from tools.capabilities import CapabilitySet, MockImageClassifier, MockImageSynthesizer, MockOutfitReasoner
from tools.item_store import inventory_key
from tools.kv_store import InMemoryKeyValueStore, JSONFileKeyValueStore
from wardrobe_app.app import SmartWardrobeApp
from wardrobe_app.config import WardrobeConfig

IMAGE = "data:image/jpeg;base64,aGVsbG8="


def _capabilities() -> CapabilitySet:
    return CapabilitySet(
        classifier=MockImageClassifier(),
        reasoner=MockOutfitReasoner(),
        synthesizer=MockImageSynthesizer(),
    )


def _app(backend=None) -> SmartWardrobeApp:
    return SmartWardrobeApp(
        config=WardrobeConfig(),
        backend=backend or InMemoryKeyValueStore(),
        capabilities=_capabilities(),
    )


def _add_item(app: SmartWardrobeApp) -> str:
    session = app.current_session()
    asyncio.run(session.creation.supply_image(IMAGE))
    return session.creation.submit().value.id


def test_register_login_and_wrong_password() -> None:
    backend = InMemoryKeyValueStore()
    accounts = AccountService(backend)

    assert accounts.register("alice", "s3cret").username == "alice"
    assert accounts.current_user().username == "alice"
    assert "s3cret" not in backend.get(USERS_KEY)

    with pytest.raises(UsernameTaken):
        accounts.register("alice", "other")
    with pytest.raises(AuthenticationFailed):
        accounts.login("alice", "wrong")
    with pytest.raises(AuthenticationFailed):
        accounts.login("  ", "s3cret")

    accounts.logout()
    assert accounts.current_user() is None
    assert accounts.login("alice", "s3cret").username == "alice"


def test_each_user_sees_only_their_inventory() -> None:
    backend = InMemoryKeyValueStore()
    app = _app(backend)

    app.register("alice", "pw")
    alice_item = _add_item(app)
    app.logout()
    assert app.current_session() is None

    bob = app.register("bob", "pw")
    assert bob.browse() == []
    _add_item(app)
    assert len(app.current_session().store) == 1

    alice = app.login("alice", "pw")
    assert [item.id for item in alice.browse()] == [alice_item]
    assert backend.get(inventory_key("alice")) != backend.get(inventory_key("bob"))


def test_session_is_restored_from_storage(tmp_path: Path) -> None:
    first = _app(JSONFileKeyValueStore(tmp_path))
    first.register("alice", "pw")
    item_id = _add_item(first)

    restarted = _app(JSONFileKeyValueStore(tmp_path))
    session = restarted.current_session()

    assert session is not None
    assert session.username == "alice"
    assert [item.id for item in session.browse()] == [item_id]


def test_delete_requires_confirmation() -> None:
    app = _app()
    app.register("alice", "pw")
    item_id = _add_item(app)
    session = app.current_session()

    assert session.delete_item(item_id) is False
    assert len(session.store) == 1
    assert session.delete_item(item_id, confirmed=True) is True
    assert session.delete_item(item_id, confirmed=True) is False
    assert session.browse() == []
