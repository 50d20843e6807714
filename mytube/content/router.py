# mytube/content/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from mytube.content import service as svc
from mytube.content.schemas import (
    AnyContentOut,
    ContentType,
    LikeOut,
    PostCreate,
    PostOut,
    VideoCreate,
    VideoOut,
    ViewOut,
)
from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.db.session import get_store
from mytube.db.store import Store

router = APIRouter(prefix="/api/content", tags=["content"])


# rutas /me/ antes que /{content_type}/... para que no las capture el path param
@router.get("/me/liked/", response_model=List[VideoOut])
async def my_liked_videos(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.liked_videos(store, session.user_id)


@router.get("/me/history/", response_model=List[VideoOut])
async def my_history(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.watch_history(store, session.user_id)


@router.get("/me/subscriptions/", response_model=List[AnyContentOut])
async def my_subscriptions_feed(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.subscription_feed(store, session.user_id)


@router.post("/video/", response_model=VideoOut)
async def publish_video(
    payload: VideoCreate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.create_video(store, session.user_id, payload)


@router.post("/post/", response_model=PostOut)
async def publish_post(
    payload: PostCreate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.create_post(store, session.user_id, payload)


@router.get("/{content_type}/", response_model=List[AnyContentOut])
async def content_list(
    content_type: ContentType,
    author_id: str | None = Query(None, alias="authorId"),
    store: Store = Depends(get_store),
):
    if author_id:
        return await svc.list_by_author(store, author_id, content_type)
    return await svc.list_contents(store, content_type)


@router.get("/{content_type}/{content_id}/", response_model=AnyContentOut)
async def content_detail(
    content_type: ContentType,
    content_id: str,
    store: Store = Depends(get_store),
):
    item = await svc.get_content(store, content_id, content_type)
    if not item:
        raise HTTPException(status_code=404, detail=f"{content_type.value} not found")
    return item


@router.post("/{content_type}/{content_id}/like/", response_model=LikeOut)
async def toggle_like(
    content_type: ContentType,
    content_id: str,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    liked, likes = await svc.like_content(store, content_id, session.user_id, content_type)
    return {"content_id": content_id, "liked": liked, "likes": likes}


@router.post("/{content_type}/{content_id}/view/", response_model=ViewOut)
async def add_view(
    content_type: ContentType,
    content_id: str,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    counted, views = await svc.view_content(store, content_id, session.user_id, content_type)
    return {"content_id": content_id, "counted": counted, "views": views}


@router.delete("/{content_type}/{content_id}/", status_code=204)
async def delete_content_endpoint(
    content_type: ContentType,
    content_id: str,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    await svc.delete_content(store, content_id, content_type, session.user_id)
    return Response(status_code=204)
