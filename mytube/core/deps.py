# mytube/core/deps.py
from fastapi import Header, HTTPException, Query

from mytube.core.security import Session, decode_access_token


def _extract_token(token: str | None, authorization: str | None) -> str:
    # token por query o Authorization: Bearer XXX
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    if not token:
        raise HTTPException(status_code=401, detail="missing token")
    return token


async def get_session(
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> Session:
    tok = _extract_token(token, authorization)
    try:
        user_id = decode_access_token(tok)
    except Exception:
        raise HTTPException(status_code=401, detail="invalid token")
    return Session(user_id=user_id)

