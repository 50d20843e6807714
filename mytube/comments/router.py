# mytube/comments/router.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Response

from mytube.comments import service as svc
from mytube.comments.schemas import CommentCreate
from mytube.content.schemas import CommentOut, ContentType
from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.db.session import get_store
from mytube.db.store import Store

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/{content_type}/{content_id}/", response_model=List[CommentOut])
async def comments_for_content(
    content_type: ContentType,
    content_id: str,
    store: Store = Depends(get_store),
):
    return await svc.list_comments(store, content_id, content_type)


@router.post("/{content_type}/{content_id}/", response_model=CommentOut)
async def create_comment_endpoint(
    content_type: ContentType,
    content_id: str,
    payload: CommentCreate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.add_comment(store, content_id, content_type, session.user_id, payload.text)


@router.post("/{content_type}/{content_id}/{comment_id}/reply/", response_model=CommentOut)
async def reply_comment_endpoint(
    content_type: ContentType,
    content_id: str,
    comment_id: str,
    payload: CommentCreate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.add_reply(
        store, content_id, content_type, comment_id, session.user_id, payload.text
    )


@router.delete("/{content_type}/{content_id}/{comment_id}/", status_code=204)
async def delete_comment_endpoint(
    content_type: ContentType,
    content_id: str,
    comment_id: str,
    parent_comment_id: str | None = Query(None, alias="parentCommentId"),
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    await svc.delete_comment(
        store,
        content_id,
        content_type,
        comment_id,
        session.user_id,
        parent_comment_id=parent_comment_id,
    )
    return Response(status_code=204)
