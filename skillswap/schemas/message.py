from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid
from skillswap.schemas.user import UserSummary


class MessageCreate(BaseModel):
    receiver_id: uuid.UUID
    content: str = Field(..., max_length=5000)

    @field_validator('content')
    @classmethod
    def content_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Message content cannot be empty')
        return v


class Message(BaseModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    content: str
    is_read: bool
    created_at: Optional[datetime] = None
    sender: Optional[UserSummary] = None
    receiver: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: Message


class ConversationResponse(BaseModel):
    messages: List[Message]


class ConversationSummary(BaseModel):
    user: UserSummary
    last_message: Message
    unread_count: int


class ConversationListResponse(BaseModel):
    conversations: List[ConversationSummary]
