from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
import uuid
from skillswap.models.user import ExchangePreference
from skillswap.schemas.skill import UserSkill


class UserSummary(BaseModel):
    """Minimal public identity shown on connections, vouches and messages"""
    id: uuid.UUID
    first_name: str
    last_name: str
    username: Optional[str] = None
    profile_image: Optional[str] = None
    location: Optional[str] = None

    class Config:
        from_attributes = True


class UserPublic(UserSummary):
    """Public profile with skill ledger. Never carries email or credentials."""
    bio: Optional[str] = None
    exchange_preference: ExchangePreference = ExchangePreference.FLEXIBLE
    created_at: Optional[datetime] = None
    user_skills: List[UserSkill] = []


class ReceivedVouch(BaseModel):
    id: uuid.UUID
    rating: int
    comment: Optional[str] = None
    skill_id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    voucher: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class UserProfile(UserPublic):
    """Public profile plus the vouches the user has received"""
    received_vouches: List[ReceivedVouch] = []
