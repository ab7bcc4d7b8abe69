from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
import uuid
from skillswap.schemas.user import UserSummary


class VouchCreate(BaseModel):
    vouched_id: uuid.UUID
    skill_id: Optional[uuid.UUID] = None
    comment: Optional[str] = Field(None, max_length=2000)
    rating: int = Field(5, ge=1, le=5)


class Vouch(BaseModel):
    id: uuid.UUID
    voucher_id: uuid.UUID
    vouched_id: uuid.UUID
    skill_id: Optional[uuid.UUID] = None
    comment: Optional[str] = None
    rating: int
    created_at: Optional[datetime] = None
    voucher: Optional[UserSummary] = None
    vouched: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class VouchResponse(BaseModel):
    vouch: Vouch


class VouchListResponse(BaseModel):
    vouches: List[Vouch]


class UserVouchesResponse(BaseModel):
    vouches: List[Vouch]
    count: int
    average_rating: float


class VouchDeleteResponse(BaseModel):
    message: str
