# mytube/notifications/router.py
from typing import List

from fastapi import APIRouter, Depends

from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.db.session import get_store
from mytube.db.store import Store
from mytube.notifications import service as svc
from mytube.notifications.schemas import MarkReadOut, NotificationOut

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/", response_model=List[NotificationOut])
async def my_notifications(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    # el front hace polling sobre esta ruta
    return await svc.list_notifications(store, session.user_id)


@router.get("/unread-count/")
async def my_unread_count(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return {"unread": await svc.unread_count(store, session.user_id)}


@router.post("/read-all/", response_model=MarkReadOut)
async def mark_read(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return {"updated": await svc.mark_all_read(store, session.user_id)}
