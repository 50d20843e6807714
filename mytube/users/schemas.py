# mytube/users/schemas.py
from pydantic import Field, field_validator

from mytube.core.schemas import CamelModel, Record, unique_ids


class UserRecord(Record):
    id: str
    uid: str | None = None
    username: str
    display_name: str = ""
    profile_picture: str = ""
    banner: str | None = None
    about: str | None = None
    email: str | None = None
    subscribers: int = 0
    subscriptions: list[str] = []
    liked_videos: list[str] = []
    liked_posts: list[str] = []
    viewed_videos: list[str] = []
    # hash argon2; nunca sale hacia el cliente
    password: str | None = None

    @field_validator("subscriptions", "liked_videos", "liked_posts", "viewed_videos")
    @classmethod
    def _as_set(cls, v: list[str]) -> list[str]:
        return unique_ids(v)

    @field_validator("subscribers")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        return max(0, v)


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^\w+$")
    display_name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    profile_picture: str = ""
    email: str | None = None
    uid: str | None = None


class UserUpdate(CamelModel):
    username: str | None = Field(default=None, min_length=3, max_length=50, pattern=r"^\w+$")
    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    profile_picture: str | None = None
    banner: str | None = None
    about: str | None = None
    email: str | None = None
    # vacío/None = conservar el secreto anterior
    password: str | None = Field(default=None, max_length=128)


class UserOut(CamelModel):
    id: str
    uid: str | None = None
    username: str
    display_name: str = ""
    profile_picture: str = ""
    banner: str | None = None
    about: str | None = None
    email: str | None = None
    subscribers: int = 0
    subscriptions: list[str] = []
    liked_videos: list[str] = []
    liked_posts: list[str] = []
    viewed_videos: list[str] = []


class LoginIn(CamelModel):
    username: str
    password: str


class TokenOut(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class SubscribeOut(CamelModel):
    channel_id: str
    subscribed: bool
    subscribers: int
