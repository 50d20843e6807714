# mytube/users/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from mytube.core.deps import get_session
from mytube.core.security import Session, create_access_token
from mytube.db.session import get_store
from mytube.db.store import Store
from mytube.users import service as svc
from mytube.users.schemas import (
    LoginIn,
    SubscribeOut,
    TokenOut,
    UserCreate,
    UserOut,
    UserUpdate,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register/", response_model=TokenOut)
async def register(payload: UserCreate, store: Store = Depends(get_store)):
    user = await svc.create_user(store, payload)
    return {"access_token": create_access_token(sub=user["id"]), "user": user}


@router.post("/login/", response_model=TokenOut)
async def login(payload: LoginIn, store: Store = Depends(get_store)):
    user = await svc.authenticate(store, payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="invalid credentials")
    return {"access_token": create_access_token(sub=user["id"]), "user": user}


@router.get("/", response_model=List[UserOut])
async def users_list(store: Store = Depends(get_store)):
    return await svc.list_users(store)


@router.get("/me/", response_model=UserOut)
async def me(
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    user = await svc.get_user(store, session.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return user


@router.patch("/me/", response_model=UserOut)
async def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    return await svc.update_user(store, session.user_id, payload)


@router.get("/by-username/{username}/", response_model=UserOut)
async def user_by_username(username: str, store: Store = Depends(get_store)):
    user = await svc.get_user_by_username(store, username)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return user


@router.get("/{user_id}/", response_model=UserOut)
async def user_detail(user_id: str, store: Store = Depends(get_store)):
    user = await svc.get_user(store, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return user


@router.post("/{channel_id}/subscribe/", response_model=SubscribeOut)
async def toggle_subscription(
    channel_id: str,
    session: Session = Depends(get_session),
    store: Store = Depends(get_store),
):
    subscribed, subscribers = await svc.subscribe(store, session.user_id, channel_id)
    return {"channel_id": channel_id, "subscribed": subscribed, "subscribers": subscribers}
