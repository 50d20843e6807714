# mytube/content/service.py
from __future__ import annotations

import logging

from mytube.comments.service import mark_media
from mytube.content.repository import (
    get_by_id,
    load_contents,
    save_contents,
    table_for,
)
from mytube.content.schemas import (
    ContentRecord,
    ContentType,
    PostCreate,
    PostRecord,
    VideoCreate,
    VideoRecord,
)
from mytube.core.errors import NotFound, Unauthorized
from mytube.core.hydration import hydrate, index_users
from mytube.db.store import Store, new_id, utc_now
from mytube.media.storage import delete_local_media
from mytube.notifications.schemas import NotificationType
from mytube.notifications.service import notify, notify_many
from mytube.users import repository as users_repo

log = logging.getLogger("uvicorn")

NEW_CONTENT_NOTIFICATION = {
    ContentType.VIDEO: NotificationType.NEW_VIDEO,
    ContentType.POST: NotificationType.NEW_POST,
}


def to_view(record: ContentRecord, content_type: ContentType, users: dict[str, dict]) -> dict:
    """Registro -> dict hidratado listo para responder (con `type`)."""
    out = hydrate(record.dump(), users)
    mark_media(out.get("comments") or [])
    out["type"] = ContentType(content_type).value
    return out


def _newest_first(views: list[dict]) -> list[dict]:
    return sorted(views, key=lambda v: v.get("createdAt") or "", reverse=True)


# -------------------------
# lecturas
# -------------------------
async def list_contents(store: Store, content_type: ContentType) -> list[dict]:
    content_type = ContentType(content_type)
    items = await load_contents(store, content_type)
    users = index_users(u.dump() for u in await users_repo.load_users(store))
    return [to_view(i, content_type, users) for i in items]


async def get_content(store: Store, content_id: str, content_type: ContentType) -> dict | None:
    item = get_by_id(await load_contents(store, content_type), content_id)
    if not item:
        return None
    users = index_users(u.dump() for u in await users_repo.load_users(store))
    return to_view(item, content_type, users)


async def list_by_author(store: Store, author_id: str, content_type: ContentType) -> list[dict]:
    views = await list_contents(store, content_type)
    return _newest_first([v for v in views if v.get("authorId") == author_id])


async def liked_videos(store: Store, user_id: str) -> list[dict]:
    user = users_repo.get_by_id(await users_repo.load_users(store), user_id)
    if not user:
        raise NotFound("user not found")
    by_id = {v["id"]: v for v in await list_contents(store, ContentType.VIDEO)}
    return [by_id[i] for i in user.liked_videos if i in by_id]


async def watch_history(store: Store, user_id: str) -> list[dict]:
    """Videos vistos, el último visto primero."""
    user = users_repo.get_by_id(await users_repo.load_users(store), user_id)
    if not user:
        raise NotFound("user not found")
    by_id = {v["id"]: v for v in await list_contents(store, ContentType.VIDEO)}
    return [by_id[i] for i in reversed(user.viewed_videos) if i in by_id]


async def subscription_feed(store: Store, user_id: str) -> list[dict]:
    """Videos y posts de los canales a los que el usuario está suscrito."""
    user = users_repo.get_by_id(await users_repo.load_users(store), user_id)
    if not user:
        raise NotFound("user not found")
    channels = set(user.subscriptions)
    views: list[dict] = []
    for content_type in ContentType:
        views.extend(
            v for v in await list_contents(store, content_type) if v.get("authorId") in channels
        )
    return _newest_first(views)


# -------------------------
# creación
# -------------------------
async def _publish(store: Store, content_type: ContentType, record: ContentRecord, text: str) -> dict:
    users = await users_repo.load_users(store)
    author = users_repo.get_by_id(users, record.author_id)
    if not author:
        raise NotFound("Author not found")

    items = await load_contents(store, content_type)
    items.append(record)
    await save_contents(store, content_type, items)
    log.info(f"🎬 {content_type.value} publicado: {record.id} por {author.username}")

    followers = [u.id for u in users_repo.subscribers_of(users, author.id)]
    await notify_many(
        store,
        followers,
        author.id,
        NEW_CONTENT_NOTIFICATION[content_type],
        content_id=record.id,
        content_type=content_type,
        text=text,
    )
    return to_view(record, content_type, index_users(u.dump() for u in users))


async def create_video(store: Store, author_id: str, data: VideoCreate) -> dict:
    record = VideoRecord(
        id=new_id(table_for(ContentType.VIDEO).id_prefix),
        author_id=author_id,
        created_at=utc_now(),
        title=data.title,
        description=data.description,
        thumbnail_url=data.thumbnail_url,
        video_url=data.video_url,
        duration=data.duration,
    )
    return await _publish(store, ContentType.VIDEO, record, data.title)


async def create_post(store: Store, author_id: str, data: PostCreate) -> dict:
    record = PostRecord(
        id=new_id(table_for(ContentType.POST).id_prefix),
        author_id=author_id,
        created_at=utc_now(),
        image_url=data.image_url,
        caption=data.caption,
    )
    return await _publish(store, ContentType.POST, record, data.caption)


# -------------------------
# mutaciones
# -------------------------
async def like_content(
    store: Store, content_id: str, user_id: str, content_type: ContentType
) -> tuple[bool, int]:
    """
    Alterna el like. Devuelve (liked, likes).
    Se notifica al dueño solo al dar like y nunca por like propio.
    """
    content_type = ContentType(content_type)
    table = table_for(content_type)
    items = await load_contents(store, content_type)
    users = await users_repo.load_users(store)

    content = get_by_id(items, content_id)
    user = users_repo.get_by_id(users, user_id)
    if not content:
        raise NotFound(f"{content_type.value} not found")
    if not user:
        raise NotFound("user not found")

    liked_ids: list[str] = getattr(user, table.liked_field)
    liking = content_id not in liked_ids
    if liking:
        content.likes = content.likes + 1
        setattr(user, table.liked_field, [*liked_ids, content_id])
    else:
        content.likes = max(0, content.likes - 1)
        setattr(user, table.liked_field, [i for i in liked_ids if i != content_id])

    await save_contents(store, content_type, items)
    await users_repo.save_users(store, users)

    if liking and content.author_id != user_id:
        await notify(
            store,
            content.author_id,
            user_id,
            NotificationType.LIKE,
            content_id=content_id,
            content_type=content_type,
        )
    return liking, content.likes


async def view_content(
    store: Store,
    content_id: str,
    user_id: str,
    content_type: ContentType = ContentType.VIDEO,
) -> tuple[bool, int]:
    """
    Cuenta una vista por usuario y video. Devuelve (counted, views).
    Repetir es un no-op; los posts no tienen vistas.
    """
    if ContentType(content_type) is not ContentType.VIDEO:
        return False, 0

    items = await load_contents(store, ContentType.VIDEO)
    users = await users_repo.load_users(store)

    video = get_by_id(items, content_id)
    user = users_repo.get_by_id(users, user_id)
    if not video:
        raise NotFound("video not found")
    if not user:
        raise NotFound("user not found")

    if content_id in user.viewed_videos:
        return False, video.views

    video.views = video.views + 1
    user.viewed_videos = [*user.viewed_videos, content_id]

    await save_contents(store, ContentType.VIDEO, items)
    await users_repo.save_users(store, users)
    return True, video.views


async def delete_content(
    store: Store, content_id: str, content_type: ContentType, user_id: str
) -> None:
    """Solo el autor puede borrar. También borra la media local (best-effort)."""
    content_type = ContentType(content_type)
    items = await load_contents(store, content_type)
    content = get_by_id(items, content_id)
    if not content:
        raise NotFound(f"{content_type.value} not found")
    if content.author_id != user_id:
        raise Unauthorized("User not authorized to delete this content")

    await save_contents(store, content_type, [i for i in items if i.id != content_id])
    log.info(f"🗑️ {content_type.value} borrado: {content_id}")

    for url in _media_urls(content):
        delete_local_media(url)


def _media_urls(content: ContentRecord) -> list[str]:
    if isinstance(content, VideoRecord):
        return [content.video_url, content.thumbnail_url]
    if isinstance(content, PostRecord):
        return [content.image_url]
    return []
