# mytube/messages/router.py
from typing import List

from fastapi import APIRouter, Depends

from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.db.session import get_store
from mytube.db.store import Store
from mytube.messages import service as svc
from mytube.messages.schemas import ConversationOut, MessageCreate, MessageOut

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("/", response_model=MessageOut)
async def send(
    payload: MessageCreate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.send_message(store, session.user_id, payload.recipient_id, payload.text)


@router.get("/", response_model=List[ConversationOut])
async def conversations(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.list_conversations(store, session.user_id)


@router.get("/{other_user_id}/", response_model=List[MessageOut])
async def conversation(
    other_user_id: str,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.get_conversation(store, session.user_id, other_user_id)
