# mytube/content/repository.py
"""
Despacho por tipo de contenido.

Video y post comparten comentarios/likes pero viven en archivos distintos
y con campos propios; cada acción resuelve su tabla aquí en lugar de
comparar strings.
"""
from typing import NamedTuple

from mytube.content.schemas import (
    ContentType,
    ContentRecord,
    CommentRecord,
    VideoRecord,
    PostRecord,
)
from mytube.db.store import Kind, Store


class ContentTable(NamedTuple):
    kind: Kind
    record: type[ContentRecord]
    # lista de ids en UserRecord con los likes de este tipo
    liked_field: str
    id_prefix: str


CONTENT_TABLES: dict[ContentType, ContentTable] = {
    ContentType.VIDEO: ContentTable(Kind.VIDEOS, VideoRecord, "liked_videos", "video"),
    ContentType.POST: ContentTable(Kind.POSTS, PostRecord, "liked_posts", "post"),
}


def table_for(content_type: ContentType) -> ContentTable:
    return CONTENT_TABLES[ContentType(content_type)]


async def load_contents(store: Store, content_type: ContentType) -> list[ContentRecord]:
    table = table_for(content_type)
    return [table.record.model_validate(r) for r in await store.read(table.kind)]


async def save_contents(
    store: Store, content_type: ContentType, items: list[ContentRecord]
) -> None:
    await store.write(table_for(content_type).kind, [i.dump() for i in items])


def get_by_id(items: list[ContentRecord], content_id: str) -> ContentRecord | None:
    return next((i for i in items if i.id == content_id), None)


def find_comment(
    content: ContentRecord,
    comment_id: str,
    parent_comment_id: str | None = None,
) -> tuple[CommentRecord | None, list[CommentRecord] | None]:
    """
    Devuelve (comentario, lista que lo contiene).
    Con `parent_comment_id` busca solo entre las respuestas de ese padre;
    sin él, primero en el nivel raíz y luego en las respuestas.
    """
    if parent_comment_id:
        parent = next((c for c in content.comments if c.id == parent_comment_id), None)
        if not parent:
            return None, None
        found = next((r for r in parent.replies if r.id == comment_id), None)
        return (found, parent.replies) if found else (None, None)

    for c in content.comments:
        if c.id == comment_id:
            return c, content.comments
    for c in content.comments:
        for r in c.replies:
            if r.id == comment_id:
                return r, c.replies
    return None, None
