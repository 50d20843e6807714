# mytube/notifications/service.py
"""
Fan-out de notificaciones.

Una mutación puede generar varias notificaciones; cada una es un registro
nuevo al principio del archivo (más recientes primero) con `read=False`.
No hay push: el cliente hace polling sobre `list_notifications`.
"""
from __future__ import annotations

import logging
from typing import Iterable

from mytube.content.schemas import ContentType
from mytube.core.hydration import hydrate_all, index_users
from mytube.db.store import Kind, Store, new_id, utc_now
from mytube.notifications.schemas import NotificationRecord, NotificationType

log = logging.getLogger("uvicorn")


def _build(
    recipient_id: str,
    sender_id: str,
    type_: NotificationType,
    content_id: str | None,
    content_type: ContentType | None,
    text: str | None,
) -> NotificationRecord:
    return NotificationRecord(
        id=new_id("notif"),
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=type_,
        content_id=content_id,
        content_type=content_type,
        text=text,
        read=False,
        created_at=utc_now(),
    )


async def notify_many(
    store: Store,
    recipient_ids: Iterable[str],
    sender_id: str,
    type_: NotificationType,
    *,
    content_id: str | None = None,
    content_type: ContentType | None = None,
    text: str | None = None,
) -> list[NotificationRecord]:
    """Una notificación por destinatario distinto, en una sola escritura."""
    recipients = list(dict.fromkeys(r for r in recipient_ids if r))
    if not recipients:
        return []

    created = [
        _build(rid, sender_id, type_, content_id, content_type, text) for rid in recipients
    ]
    existing = await store.read(Kind.NOTIFICATIONS)
    await store.write(Kind.NOTIFICATIONS, [n.dump() for n in created] + existing)
    log.info(f"🔔 {type_.value}: {len(created)} notificación(es) de {sender_id}")
    return created


async def notify(
    store: Store,
    recipient_id: str,
    sender_id: str,
    type_: NotificationType,
    *,
    content_id: str | None = None,
    content_type: ContentType | None = None,
    text: str | None = None,
) -> NotificationRecord:
    created = await notify_many(
        store,
        [recipient_id],
        sender_id,
        type_,
        content_id=content_id,
        content_type=content_type,
        text=text,
    )
    return created[0]


async def list_notifications(store: Store, recipient_id: str) -> list[dict]:
    notifications = [
        n for n in await store.read(Kind.NOTIFICATIONS) if n.get("recipientId") == recipient_id
    ]
    users = index_users(await store.read(Kind.USERS))
    return hydrate_all(notifications, users)


async def unread_count(store: Store, recipient_id: str) -> int:
    return sum(
        1
        for n in await store.read(Kind.NOTIFICATIONS)
        if n.get("recipientId") == recipient_id and not n.get("read")
    )


async def mark_all_read(store: Store, recipient_id: str) -> int:
    """Marca como leídas las del destinatario. Devuelve cuántas cambiaron."""
    records = await store.read(Kind.NOTIFICATIONS)
    changed = 0
    for n in records:
        if n.get("recipientId") == recipient_id and not n.get("read"):
            n["read"] = True
            changed += 1
    if changed:
        await store.write(Kind.NOTIFICATIONS, records)
    return changed
