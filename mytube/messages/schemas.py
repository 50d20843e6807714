# mytube/messages/schemas.py
from pydantic import Field

from mytube.core.schemas import CamelModel, Record
from mytube.users.schemas import UserOut


class MessageRecord(Record):
    id: str
    sender_id: str
    recipient_id: str
    text: str
    created_at: str


class MessageCreate(CamelModel):
    recipient_id: str
    text: str = Field(..., min_length=1, max_length=4000)


class MessageOut(CamelModel):
    id: str
    sender_id: str
    sender: UserOut | None = None
    recipient_id: str
    text: str
    created_at: str


class ConversationOut(CamelModel):
    partner: UserOut
    last_message: MessageOut
