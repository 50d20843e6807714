# mytube/discovery/router.py
from typing import List

from fastapi import APIRouter, Depends, Query

from mytube.content.schemas import AnyContentOut, VideoOut
from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.db.session import get_store
from mytube.db.store import Store
from mytube.discovery import service as svc

router = APIRouter(prefix="/api/discover", tags=["discover"])


async def get_recommender() -> svc.Ranker | None:
    """Ranker remoto de recomendaciones; sin configurar se usa el fallback."""
    return None


async def get_search_ranker() -> svc.Ranker | None:
    return None


@router.get("/flow/", response_model=List[AnyContentOut])
async def flow(store: Store = Depends(get_store)):
    return await svc.flow_feed(store)


@router.get("/recommended/", response_model=List[VideoOut])
async def recommended(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
    ranker: svc.Ranker | None = Depends(get_recommender),
):
    return await svc.recommend(store, session.user_id, ranker)


@router.get("/search/", response_model=List[AnyContentOut])
async def search(
    q: str = Query("", max_length=200),
    store: Store = Depends(get_store),
    ranker: svc.Ranker | None = Depends(get_search_ranker),
):
    return await svc.search(store, q, ranker)
