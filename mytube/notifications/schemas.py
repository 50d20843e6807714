# mytube/notifications/schemas.py
from enum import Enum

from mytube.content.schemas import ContentType
from mytube.core.schemas import CamelModel, Record
from mytube.users.schemas import UserOut


class NotificationType(str, Enum):
    NEW_VIDEO = "new_video"
    NEW_POST = "new_post"
    LIKE = "like"
    COMMENT = "comment"
    MENTION = "mention"
    REPLY = "reply"
    SUBSCRIBE = "subscribe"
    MESSAGE = "message"


class NotificationRecord(Record):
    id: str
    recipient_id: str
    sender_id: str
    type: NotificationType
    content_id: str | None = None
    content_type: ContentType | None = None
    text: str | None = None
    read: bool = False
    created_at: str


class NotificationOut(CamelModel):
    id: str
    recipient_id: str
    sender_id: str
    sender: UserOut | None = None
    type: NotificationType
    content_id: str | None = None
    content_type: ContentType | None = None
    text: str | None = None
    read: bool = False
    created_at: str


class MarkReadOut(CamelModel):
    updated: int
