# mytube/content/schemas.py
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from mytube.core.schemas import CamelModel, Record
from mytube.users.schemas import UserOut


class ContentType(str, Enum):
    VIDEO = "video"
    POST = "post"


# -------------------------
# registros (disco)
# -------------------------
class CommentRecord(Record):
    id: str
    author_id: str
    # puede ser una URL de GIF/sticker, ver comments.service.is_media_comment
    text: str
    created_at: str
    likes: int = 0
    replies: list[CommentRecord] = []

    @field_validator("likes")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        return max(0, v)


class ContentRecord(Record):
    id: str
    author_id: str
    likes: int = 0
    dislikes: int = 0
    created_at: str
    # más recientes primero
    comments: list[CommentRecord] = []

    @field_validator("likes", "dislikes")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        return max(0, v)


class VideoRecord(ContentRecord):
    title: str
    description: str = ""
    thumbnail_url: str = ""
    video_url: str = ""
    duration: float = 0  # segundos
    views: int = 0


class PostRecord(ContentRecord):
    image_url: str = ""
    caption: str = ""


# -------------------------
# entrada
# -------------------------
class VideoCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    thumbnail_url: str = Field(..., min_length=1)
    video_url: str = Field(..., min_length=1)
    duration: float = Field(default=0, ge=0)


class PostCreate(CamelModel):
    image_url: str = Field(..., min_length=1)
    caption: str = ""


# -------------------------
# salida (hidratado)
# -------------------------
class CommentOut(CamelModel):
    id: str
    author_id: str
    author: UserOut | None = None
    text: str
    created_at: str
    likes: int = 0
    # el texto es solo la URL de un GIF/sticker
    is_media: bool = False
    replies: list[CommentOut] = []


class ContentOut(CamelModel):
    id: str
    author_id: str
    author: UserOut | None = None
    likes: int = 0
    dislikes: int = 0
    created_at: str
    comments: list[CommentOut] = []


class VideoOut(ContentOut):
    type: Literal["video"] = "video"
    title: str
    description: str = ""
    thumbnail_url: str = ""
    video_url: str = ""
    duration: float = 0
    views: int = 0


class PostOut(ContentOut):
    type: Literal["post"] = "post"
    image_url: str = ""
    caption: str = ""


AnyContentOut = Annotated[Union[VideoOut, PostOut], Field(discriminator="type")]


class LikeOut(CamelModel):
    content_id: str
    liked: bool
    likes: int


class ViewOut(CamelModel):
    content_id: str
    counted: bool
    views: int


CommentRecord.model_rebuild()
CommentOut.model_rebuild()
