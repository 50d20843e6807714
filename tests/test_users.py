# tests/test_users.py
"""Tests for user actions: registration, profile edit, login, subscribe."""
import pytest

from mytube.core.errors import Conflict, InvalidAction, NotFound
from mytube.db.store import Kind
from mytube.users import service as svc
from mytube.users.schemas import UserCreate, UserUpdate
from tests.conftest import load


def _new_user(username: str = "dave", password: str = "hunter22") -> UserCreate:
    return UserCreate(username=username, display_name="Dave", password=password)


@pytest.mark.asyncio
async def test_create_user_hashes_secret_and_hides_it(seeded) -> None:
    user = await svc.create_user(seeded, _new_user())

    assert user["username"] == "dave"
    assert user["id"].startswith("user-")
    assert "password" not in user

    stored = next(u for u in load(seeded, Kind.USERS) if u["username"] == "dave")
    assert stored["password"] != "hunter22"
    assert stored["password"].startswith("$argon2")


@pytest.mark.asyncio
async def test_duplicate_username_conflicts_and_leaves_store_unchanged(seeded) -> None:
    with open(seeded.path_for(Kind.USERS), "rb") as f:
        before = f.read()

    with pytest.raises(Conflict):
        await svc.create_user(seeded, _new_user(username="alice"))

    with open(seeded.path_for(Kind.USERS), "rb") as f:
        assert f.read() == before


@pytest.mark.asyncio
async def test_update_user_preserves_secret_when_not_supplied(seeded) -> None:
    created = await svc.create_user(seeded, _new_user())

    updated = await svc.update_user(
        seeded, created["id"], UserUpdate(display_name="Dave II", about="hello")
    )

    assert updated["displayName"] == "Dave II"
    assert updated["about"] == "hello"
    assert await svc.authenticate(seeded, "dave", "hunter22") is not None


@pytest.mark.asyncio
async def test_update_user_replaces_secret(seeded) -> None:
    created = await svc.create_user(seeded, _new_user())

    await svc.update_user(seeded, created["id"], UserUpdate(password="new-secret"))

    assert await svc.authenticate(seeded, "dave", "hunter22") is None
    assert await svc.authenticate(seeded, "dave", "new-secret") is not None


@pytest.mark.asyncio
async def test_update_user_rename_onto_taken_username_conflicts(seeded) -> None:
    with pytest.raises(Conflict):
        await svc.update_user(seeded, "u1", UserUpdate(username="bob"))


@pytest.mark.asyncio
async def test_update_unknown_user_not_found(seeded) -> None:
    with pytest.raises(NotFound):
        await svc.update_user(seeded, "nope", UserUpdate(about="x"))


@pytest.mark.asyncio
async def test_authenticate_rejects_user_without_secret(seeded) -> None:
    # usuarios sembrados sin password
    assert await svc.authenticate(seeded, "alice", "anything") is None
    assert await svc.authenticate(seeded, "nobody", "anything") is None


@pytest.mark.asyncio
async def test_subscribe_toggles_and_notifies_only_on_subscribe(seeded) -> None:
    subscribed, count = await svc.subscribe(seeded, "u1", "u2")
    assert subscribed is True
    assert count == 2

    users = {u["id"]: u for u in load(seeded, Kind.USERS)}
    assert users["u1"]["subscriptions"] == ["u2"]
    assert users["u2"]["subscribers"] == 2

    subscribed, count = await svc.subscribe(seeded, "u1", "u2")
    assert subscribed is False
    assert count == 1

    users = {u["id"]: u for u in load(seeded, Kind.USERS)}
    assert users["u1"]["subscriptions"] == []
    assert users["u2"]["subscribers"] == 1

    notifications = load(seeded, Kind.NOTIFICATIONS)
    assert [(n["type"], n["recipientId"], n["senderId"]) for n in notifications] == [
        ("subscribe", "u2", "u1")
    ]


@pytest.mark.asyncio
async def test_unsubscribe_never_goes_below_zero(seeded) -> None:
    # carol está suscrita a bob; forzamos un contador desincronizado
    users = load(seeded, Kind.USERS)
    for u in users:
        if u["id"] == "u2":
            u["subscribers"] = 0
    await seeded.write(Kind.USERS, users)

    subscribed, count = await svc.subscribe(seeded, "u3", "u2")

    assert subscribed is False
    assert count == 0


@pytest.mark.asyncio
async def test_subscribe_to_self_is_rejected(seeded) -> None:
    with pytest.raises(InvalidAction):
        await svc.subscribe(seeded, "u1", "u1")


@pytest.mark.asyncio
async def test_subscribe_to_unknown_channel_not_found(seeded) -> None:
    with pytest.raises(NotFound):
        await svc.subscribe(seeded, "u1", "ghost")


@pytest.mark.asyncio
async def test_duplicate_ids_in_lists_are_collapsed(seeded) -> None:
    users = load(seeded, Kind.USERS)
    users[0]["likedVideos"] = ["v1", "v1"]
    await seeded.write(Kind.USERS, users)

    user = await svc.get_user(seeded, "u1")

    assert user["likedVideos"] == ["v1"]
