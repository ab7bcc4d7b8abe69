from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum
import uuid
from skillswap.models.connection import ConnectionStatus
from skillswap.schemas.user import UserSummary


class ConnectionCreate(BaseModel):
    receiver_id: uuid.UUID
    message: Optional[str] = Field(None, max_length=1000)


class Connection(BaseModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    status: ConnectionStatus
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sender: Optional[UserSummary] = None
    receiver: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class ConnectionResponse(BaseModel):
    connection: Connection


class ConnectionListResponse(BaseModel):
    """Connections grouped the way the connections page renders them"""
    sent: List[Connection]  # Pending, caller is sender
    received: List[Connection]  # Pending, caller is receiver
    accepted: List[Connection]
    all: List[Connection]


class ConnectionStatusResponse(BaseModel):
    status: str  # NONE, PENDING, ACCEPTED or REJECTED
    is_sender: Optional[bool] = None
    connection: Optional[Connection] = None


class ConnectionCancelResponse(BaseModel):
    message: str


class ConnectionDecision(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
