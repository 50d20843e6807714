# mytube/comments/service.py
from __future__ import annotations

import re
import logging

from mytube.content.repository import find_comment, get_by_id, load_contents, save_contents
from mytube.content.schemas import CommentRecord, ContentType
from mytube.core.errors import NotFound, Unauthorized
from mytube.core.hydration import hydrate, index_users
from mytube.db.store import Store, new_id, utc_now
from mytube.notifications.schemas import NotificationType
from mytube.notifications.service import notify, notify_many
from mytube.users import repository as users_repo
from mytube.users.schemas import UserRecord

log = logging.getLogger("uvicorn")

MENTION_RE = re.compile(r"@(\w+)")

# extensiones que el front pinta como imagen animada
MEDIA_COMMENT_EXTS = (".gif", ".webp")


def extract_mentions(text: str) -> list[str]:
    """Usernames mencionados con @, sin repetir y en orden de aparición."""
    return list(dict.fromkeys(MENTION_RE.findall(text or "")))


def is_media_comment(text: str) -> bool:
    """Un comentario que es solo la URL de un GIF/sticker."""
    t = (text or "").strip()
    if t.startswith("https://media.giphy.com"):
        return True
    return t.startswith("http") and t.lower().endswith(MEDIA_COMMENT_EXTS)


def mark_media(comments: list[dict]) -> list[dict]:
    """Marca `isMedia` en comentarios hidratados y sus respuestas."""
    for c in comments:
        c["isMedia"] = is_media_comment(c.get("text", ""))
        mark_media(c.get("replies") or [])
    return comments


def _mentioned_ids(users: list[UserRecord], text: str, author_id: str) -> list[str]:
    by_username = {u.username: u.id for u in users}
    ids = [by_username[name] for name in extract_mentions(text) if name in by_username]
    return [i for i in ids if i != author_id]


async def _notify_mentions(
    store: Store,
    users: list[UserRecord],
    text: str,
    author_id: str,
    content_id: str,
    content_type: ContentType,
) -> None:
    await notify_many(
        store,
        _mentioned_ids(users, text, author_id),
        author_id,
        NotificationType.MENTION,
        content_id=content_id,
        content_type=content_type,
        text=text,
    )


async def list_comments(store: Store, content_id: str, content_type: ContentType) -> list[dict]:
    content = get_by_id(await load_contents(store, content_type), content_id)
    if not content:
        raise NotFound(f"{ContentType(content_type).value} not found")
    users = index_users(u.dump() for u in await users_repo.load_users(store))
    return mark_media(hydrate(content.dump(), users)["comments"])


async def add_comment(
    store: Store,
    content_id: str,
    content_type: ContentType,
    author_id: str,
    text: str,
) -> dict:
    """
    Inserta el comentario al principio de la lista del contenido.
    Notifica al dueño (si no es el mismo autor) y a cada @mención.
    """
    content_type = ContentType(content_type)
    users = await users_repo.load_users(store)
    author = users_repo.get_by_id(users, author_id)
    if not author:
        raise NotFound("Comment author not found")

    items = await load_contents(store, content_type)
    content = get_by_id(items, content_id)
    if not content:
        raise NotFound(f"{content_type.value} not found")

    comment = CommentRecord(
        id=new_id("comment"),
        author_id=author_id,
        text=text,
        created_at=utc_now(),
        likes=0,
        replies=[],
    )
    content.comments.insert(0, comment)
    await save_contents(store, content_type, items)

    if content.author_id != author_id:
        await notify(
            store,
            content.author_id,
            author_id,
            NotificationType.COMMENT,
            content_id=content_id,
            content_type=content_type,
            text=text,
        )
    await _notify_mentions(store, users, text, author_id, content_id, content_type)

    return mark_media([hydrate(comment.dump(), index_users(u.dump() for u in users))])[0]


async def add_reply(
    store: Store,
    content_id: str,
    content_type: ContentType,
    parent_comment_id: str,
    author_id: str,
    text: str,
) -> dict:
    """
    Respuesta bajo un comentario raíz (un solo nivel de anidación).
    Las respuestas van en orden cronológico. Notifica al autor del
    comentario padre y a las @menciones.
    """
    content_type = ContentType(content_type)
    users = await users_repo.load_users(store)
    author = users_repo.get_by_id(users, author_id)
    if not author:
        raise NotFound("Reply author not found")

    items = await load_contents(store, content_type)
    content = get_by_id(items, content_id)
    if not content:
        raise NotFound(f"{content_type.value} not found")

    parent = next((c for c in content.comments if c.id == parent_comment_id), None)
    if not parent:
        raise NotFound("Parent comment not found")

    reply = CommentRecord(
        id=new_id("reply"),
        author_id=author_id,
        text=text,
        created_at=utc_now(),
        likes=0,
        replies=[],
    )
    parent.replies.append(reply)
    await save_contents(store, content_type, items)

    if parent.author_id != author_id:
        await notify(
            store,
            parent.author_id,
            author_id,
            NotificationType.REPLY,
            content_id=content_id,
            content_type=content_type,
            text=text,
        )
    await _notify_mentions(store, users, text, author_id, content_id, content_type)

    return mark_media([hydrate(reply.dump(), index_users(u.dump() for u in users))])[0]


async def delete_comment(
    store: Store,
    content_id: str,
    content_type: ContentType,
    comment_id: str,
    user_id: str,
    parent_comment_id: str | None = None,
) -> None:
    """
    Borra un comentario o una respuesta. Puede hacerlo el autor del
    comentario o el autor del contenido. Borrar un comentario raíz se
    lleva sus respuestas.
    """
    content_type = ContentType(content_type)
    items = await load_contents(store, content_type)
    content = get_by_id(items, content_id)
    if not content:
        raise NotFound(f"{content_type.value} not found")

    comment, container = find_comment(content, comment_id, parent_comment_id)
    if comment is None or container is None:
        raise NotFound("Comment not found")

    if user_id not in (comment.author_id, content.author_id):
        raise Unauthorized("User not authorized to delete this comment")

    container[:] = [c for c in container if c.id != comment_id]
    await save_contents(store, content_type, items)
    log.info(f"🗑️ comentario {comment_id} borrado de {content_type.value} {content_id}")
