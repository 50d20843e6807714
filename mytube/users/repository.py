# mytube/users/repository.py
from mytube.db.store import Kind, Store
from mytube.users.schemas import UserRecord


async def load_users(store: Store) -> list[UserRecord]:
    return [UserRecord.model_validate(u) for u in await store.read(Kind.USERS)]


async def save_users(store: Store, users: list[UserRecord]) -> None:
    await store.write(Kind.USERS, [u.dump() for u in users])


def get_by_id(users: list[UserRecord], user_id: str) -> UserRecord | None:
    return next((u for u in users if u.id == user_id), None)


def get_by_username(users: list[UserRecord], username: str) -> UserRecord | None:
    return next((u for u in users if u.username == username), None)


def subscribers_of(users: list[UserRecord], channel_id: str) -> list[UserRecord]:
    return [u for u in users if channel_id in u.subscriptions]
