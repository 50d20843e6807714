# mytube/media/router.py
from fastapi import APIRouter, Depends, File, UploadFile

from mytube.core.deps import get_session
from mytube.core.security import Session
from mytube.media.storage import save_upload

router = APIRouter(prefix="/api/media", tags=["media"])


@router.post("/upload/")
async def upload(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """Sube miniaturas, videos, imágenes de post o avatares."""
    data = await file.read()
    url = save_upload(data, file.filename)
    return {"url": url}
