# mytube/messages/service.py
from __future__ import annotations

from mytube.core.errors import InvalidAction, NotFound
from mytube.core.hydration import hydrate, hydrate_all, index_users
from mytube.db.store import Kind, Store, new_id, utc_now
from mytube.messages.schemas import MessageRecord
from mytube.notifications.schemas import NotificationType
from mytube.notifications.service import notify
from mytube.users import repository as users_repo


async def send_message(store: Store, sender_id: str, recipient_id: str, text: str) -> dict:
    if sender_id == recipient_id:
        raise InvalidAction("cannot message yourself")

    users = await users_repo.load_users(store)
    if not users_repo.get_by_id(users, sender_id):
        raise NotFound("sender not found")
    if not users_repo.get_by_id(users, recipient_id):
        raise NotFound("Recipient not found")

    message = MessageRecord(
        id=new_id("msg"),
        sender_id=sender_id,
        recipient_id=recipient_id,
        text=text,
        created_at=utc_now(),
    )
    messages = await store.read(Kind.MESSAGES)
    messages.append(message.dump())
    await store.write(Kind.MESSAGES, messages)

    await notify(store, recipient_id, sender_id, NotificationType.MESSAGE, text=text)
    return hydrate(message.dump(), index_users(u.dump() for u in users))


def _between(msg: dict, a: str, b: str) -> bool:
    return (msg.get("senderId"), msg.get("recipientId")) in ((a, b), (b, a))


async def get_conversation(store: Store, current_user_id: str, other_user_id: str) -> list[dict]:
    """Mensajes entre dos usuarios, el más antiguo primero."""
    thread = [
        m for m in await store.read(Kind.MESSAGES) if _between(m, current_user_id, other_user_id)
    ]
    thread.sort(key=lambda m: m.get("createdAt") or "")
    users = index_users(await store.read(Kind.USERS))
    return hydrate_all(thread, users)


async def list_conversations(store: Store, user_id: str) -> list[dict]:
    """
    Una entrada por interlocutor con su último mensaje, la conversación
    más reciente primero. Interlocutores que ya no existen se omiten.
    """
    last_by_partner: dict[str, dict] = {}
    for m in await store.read(Kind.MESSAGES):
        if m.get("senderId") == user_id:
            partner = m.get("recipientId")
        elif m.get("recipientId") == user_id:
            partner = m.get("senderId")
        else:
            continue
        current = last_by_partner.get(partner)
        if current is None or (m.get("createdAt") or "") >= (current.get("createdAt") or ""):
            last_by_partner[partner] = m

    users = index_users(await store.read(Kind.USERS))
    out = [
        {"partner": users[partner], "lastMessage": hydrate(m, users)}
        for partner, m in last_by_partner.items()
        if partner in users
    ]
    out.sort(key=lambda c: c["lastMessage"].get("createdAt") or "", reverse=True)
    return out
