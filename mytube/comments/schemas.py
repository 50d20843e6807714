# mytube/comments/schemas.py
from pydantic import Field

from mytube.core.schemas import CamelModel


class CommentCreate(CamelModel):
    # texto libre o URL de GIF/sticker
    text: str = Field(..., min_length=1, max_length=2000)
