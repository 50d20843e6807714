# mytube/discovery/service.py
"""
Recomendaciones, búsqueda y feed "flow".

El ranking lo hace un servicio remoto opaco (un `Ranker`): recibe un
payload JSON y devuelve ids ordenados. Si no hay ranker configurado, si
falla o si no devuelve nada, se usa el fallback local: mezcla aleatoria
para recomendaciones y filtro por texto para la búsqueda.
"""
from __future__ import annotations

import random
import logging
from typing import Awaitable, Callable

from mytube.content.schemas import ContentType
from mytube.content.service import list_contents
from mytube.core.config import settings
from mytube.core.errors import NotFound
from mytube.db.store import Store
from mytube.users import repository as users_repo

log = logging.getLogger("uvicorn")

Ranker = Callable[[dict], Awaitable[list[dict]]]

# canal de demo que no entra en el fallback de recomendaciones
HIDDEN_FALLBACK_AUTHORS = {"admin"}


def _username(view: dict) -> str:
    return (view.get("author") or {}).get("username", "")


def _pick(views: list[dict], ranked: list[dict]) -> list[dict]:
    """Reordena `views` según los ids del ranker (ignora ids desconocidos)."""
    by_id = {v["id"]: v for v in views}
    ids = dict.fromkeys(r.get("id") for r in ranked if isinstance(r, dict))
    return [by_id[i] for i in ids if i in by_id]


async def _ask(ranker: Ranker | None, payload: dict, what: str) -> list[dict]:
    if ranker is None:
        return []
    try:
        return list(await ranker(payload) or [])
    except Exception as e:
        log.warning(f"⚠️ Ranker de {what} falló, usando fallback: {e!r}")
        return []


async def flow_feed(store: Store, rng: random.Random | None = None) -> list[dict]:
    """Videos y posts mezclados al azar."""
    items = await list_contents(store, ContentType.VIDEO) + await list_contents(
        store, ContentType.POST
    )
    (rng or random).shuffle(items)
    return items


async def recommend(
    store: Store,
    user_id: str,
    ranker: Ranker | None = None,
    *,
    boost_by_views: float | None = None,
    boost_by_likes: float | None = None,
    rng: random.Random | None = None,
) -> list[dict]:
    users = await users_repo.load_users(store)
    user = users_repo.get_by_id(users, user_id)
    if not user:
        raise NotFound("user not found")

    videos = await list_contents(store, ContentType.VIDEO)
    usernames = {u.id: u.username for u in users}

    payload = {
        "userProfile": {
            "username": user.username,
            "likedVideos": user.liked_videos,
            "viewedVideos": user.viewed_videos,
            "subscribedChannels": [usernames[s] for s in user.subscriptions if s in usernames],
        },
        "allVideos": [
            {
                "id": v["id"],
                "title": v.get("title", ""),
                "description": v.get("description", ""),
                "username": _username(v),
                "views": v.get("views", 0),
                "likes": v.get("likes", 0),
                "commentCount": len(v.get("comments", [])),
            }
            for v in videos
        ],
        "boostByViews": boost_by_views if boost_by_views is not None else settings.RECOMMEND_BOOST_VIEWS,
        "boostByLikes": boost_by_likes if boost_by_likes is not None else settings.RECOMMEND_BOOST_LIKES,
    }

    picked = _pick(videos, await _ask(ranker, payload, "recomendaciones"))
    if picked:
        return picked

    fallback = [v for v in videos if v.get("author") and _username(v) not in HIDDEN_FALLBACK_AUTHORS]
    (rng or random).shuffle(fallback)
    return fallback


def _matches(view: dict, query: str) -> bool:
    haystack = " ".join(
        str(view.get(k, "")) for k in ("title", "description", "caption")
    ) + " " + _username(view)
    return query in haystack.lower()


async def search(store: Store, query: str, ranker: Ranker | None = None) -> list[dict]:
    q = (query or "").strip()
    if not q:
        return []

    items = await list_contents(store, ContentType.VIDEO) + await list_contents(
        store, ContentType.POST
    )
    payload = {
        "query": q,
        "contentList": [
            {
                "id": v["id"],
                "title": v.get("title") or v.get("caption", ""),
                "description": v.get("description", ""),
                "username": _username(v),
            }
            for v in items
        ],
    }
    picked = _pick(items, await _ask(ranker, payload, "búsqueda"))
    if picked:
        return picked

    ql = q.lower()
    return [v for v in items if _matches(v, ql)]
