from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum
from skillswap.models.skill import SkillDirection
from skillswap.schemas.skill import UserSkill
from skillswap.schemas.user import UserPublic, UserProfile


class MatchType(str, Enum):
    PERFECT_SWAP = "PERFECT_SWAP"
    TEACHER = "TEACHER"
    LEARNER = "LEARNER"
    NO_MATCH = "NO_MATCH"


class MatchTypeFilter(str, Enum):
    """Values accepted by ``GET /matches?type=``"""
    PERFECT = "perfect"
    TEACHERS = "teachers"
    LEARNERS = "learners"


class UserSearchFilters(BaseModel):
    """Optional user search filters; each field is independent and nullable"""
    query: Optional[str] = Field(None, description="Substring of first name, last name or username")
    category: Optional[str] = Field(None, description="Category name of some ledger entry")
    location: Optional[str] = Field(None, description="Substring of the user's location")
    skill_type: Optional[SkillDirection] = Field(None, description="Direction of some ledger entry")


class MatchCandidate(UserPublic):
    match_type: MatchType
    match_score: int


class MatchListResponse(BaseModel):
    matches: List[MatchCandidate]


class MatchDetailsResponse(BaseModel):
    user: UserProfile
    match_type: MatchType
    they_can_teach_me: List[UserSkill]
    i_can_teach_them: List[UserSkill]


class UserSearchResponse(BaseModel):
    users: List[UserPublic]
