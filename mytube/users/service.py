# mytube/users/service.py
from __future__ import annotations

import logging

from mytube.core.errors import Conflict, InvalidAction, NotFound
from mytube.core.hydration import public_user
from mytube.core.security import hash_password, verify_password
from mytube.db.store import Store, new_id
from mytube.notifications.schemas import NotificationType
from mytube.notifications.service import notify
from mytube.users.repository import get_by_id, get_by_username, load_users, save_users
from mytube.users.schemas import UserCreate, UserRecord, UserUpdate

log = logging.getLogger("uvicorn")


async def list_users(store: Store) -> list[dict]:
    return [public_user(u.dump()) for u in await load_users(store)]


async def get_user(store: Store, user_id: str) -> dict | None:
    user = get_by_id(await load_users(store), user_id)
    return public_user(user.dump()) if user else None


async def get_user_by_username(store: Store, username: str) -> dict | None:
    user = get_by_username(await load_users(store), username)
    return public_user(user.dump()) if user else None


async def create_user(store: Store, data: UserCreate) -> dict:
    users = await load_users(store)
    if get_by_username(users, data.username):
        raise Conflict("username already exists")

    user = UserRecord(
        id=new_id("user"),
        uid=data.uid,
        username=data.username,
        display_name=data.display_name,
        profile_picture=data.profile_picture,
        email=data.email,
        password=hash_password(data.password),
    )
    users.append(user)
    await save_users(store, users)
    log.info(f"👤 Usuario creado: {user.username} ({user.id})")
    return public_user(user.dump())


async def update_user(store: Store, user_id: str, changes: UserUpdate) -> dict:
    """
    Reemplaza los campos enviados. Sin password nuevo se conserva el
    secreto anterior.
    """
    users = await load_users(store)
    user = get_by_id(users, user_id)
    if not user:
        raise NotFound("user not found")

    if changes.username and changes.username != user.username:
        if get_by_username(users, changes.username):
            raise Conflict("username already exists")
        user.username = changes.username

    for field in ("display_name", "profile_picture", "banner", "about", "email"):
        value = getattr(changes, field)
        if value is not None:
            setattr(user, field, value)

    if changes.password:
        user.password = hash_password(changes.password)

    await save_users(store, users)
    return public_user(user.dump())


async def authenticate(store: Store, username: str, password: str) -> dict | None:
    user = get_by_username(await load_users(store), username)
    if not user or not verify_password(password, user.password):
        return None
    return public_user(user.dump())


async def subscribe(store: Store, current_user_id: str, channel_user_id: str) -> tuple[bool, int]:
    """
    Alterna la suscripción. Devuelve (subscribed, subscribers del canal).
    Solo se notifica al suscribirse.
    """
    if current_user_id == channel_user_id:
        raise InvalidAction("cannot subscribe to yourself")

    users = await load_users(store)
    current = get_by_id(users, current_user_id)
    channel = get_by_id(users, channel_user_id)
    if not current:
        raise NotFound("user not found")
    if not channel:
        raise NotFound("channel not found")

    subscribing = channel_user_id not in current.subscriptions
    if subscribing:
        current.subscriptions = [*current.subscriptions, channel_user_id]
        channel.subscribers = channel.subscribers + 1
    else:
        current.subscriptions = [s for s in current.subscriptions if s != channel_user_id]
        channel.subscribers = max(0, channel.subscribers - 1)

    await save_users(store, users)

    if subscribing:
        await notify(store, channel_user_id, current_user_id, NotificationType.SUBSCRIBE)
    return subscribing, channel.subscribers
