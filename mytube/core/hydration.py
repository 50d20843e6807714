# mytube/core/hydration.py
"""
Proyección de lectura: resuelve `authorId` / `senderId` en objetos
`author` / `sender` embebidos, usando un snapshot de usuarios.

Todo aquí es puro: se trabaja sobre copias y nunca se toca ni el registro
ni el snapshot. Lo hidratado es solo para responder; lo que se persiste
es siempre el registro plano con sus llaves foráneas.
"""
from __future__ import annotations

import copy
from typing import Iterable, Mapping

# Los comentarios solo admiten un nivel de respuestas.
MAX_REPLY_DEPTH = 1

SECRET_FIELDS = ("password",)


def public_user(user: Mapping) -> dict:
    return {k: copy.deepcopy(v) for k, v in user.items() if k not in SECRET_FIELDS}


def index_users(users: Iterable[Mapping]) -> dict[str, dict]:
    """Snapshot id -> usuario público (sin secreto)."""
    return {u["id"]: public_user(u) for u in users if u.get("id")}


def _resolve(out: dict, users: Mapping[str, dict]) -> None:
    # un author/sender ya embebido es una foto vieja: se descarta
    out.pop("author", None)
    out.pop("sender", None)

    author_id = out.get("authorId")
    if author_id and author_id in users:
        out["author"] = copy.deepcopy(users[author_id])

    sender_id = out.get("senderId")
    if sender_id and sender_id in users:
        out["sender"] = copy.deepcopy(users[sender_id])


def _hydrate_comment(comment: Mapping, users: Mapping[str, dict], level: int) -> dict:
    out = copy.deepcopy(dict(comment))
    _resolve(out, users)
    replies = out.get("replies")
    if level >= MAX_REPLY_DEPTH or not isinstance(replies, list):
        out["replies"] = []
    else:
        out["replies"] = [
            _hydrate_comment(r, users, level + 1) for r in replies if isinstance(r, Mapping)
        ]
    return out


def hydrate(item: Mapping, users: Mapping[str, dict]) -> dict:
    """
    Hidrata un contenido (video/post), comentario, mensaje o notificación.
    Si la referencia no existe el campo queda ausente; nunca falla.
    """
    if "replies" in item and "comments" not in item:
        return _hydrate_comment(item, users, 0)

    out = copy.deepcopy(dict(item))
    _resolve(out, users)
    comments = out.get("comments")
    if isinstance(comments, list):
        out["comments"] = [
            _hydrate_comment(c, users, 0) for c in comments if isinstance(c, Mapping)
        ]
    return out


def hydrate_all(items: Iterable[Mapping], users: Mapping[str, dict]) -> list[dict]:
    return [hydrate(i, users) for i in items]
