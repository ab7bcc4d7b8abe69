from .skill import (
    Category, Skill, SkillCreate, UserSkill, UserSkillCreate, UserSkillUpdate,
    SkillResponse, SkillListResponse, CategoryListResponse,
    UserSkillResponse, UserSkillsResponse, DeleteResponse,
)
from .user import UserSummary, UserPublic, UserProfile
from .match import (
    MatchType, MatchTypeFilter, UserSearchFilters, MatchCandidate,
    MatchListResponse, MatchDetailsResponse, UserSearchResponse,
)
from .connection import (
    Connection, ConnectionCreate, ConnectionResponse, ConnectionListResponse,
    ConnectionStatusResponse, ConnectionCancelResponse, ConnectionDecision,
)
from .vouch import (
    Vouch, VouchCreate, VouchResponse, VouchListResponse, UserVouchesResponse, VouchDeleteResponse,
)
from .message import (
    Message, MessageCreate, MessageResponse, ConversationResponse,
    ConversationSummary, ConversationListResponse,
)

__all__ = [
    "Category", "Skill", "SkillCreate", "UserSkill", "UserSkillCreate", "UserSkillUpdate",
    "SkillResponse", "SkillListResponse", "CategoryListResponse",
    "UserSkillResponse", "UserSkillsResponse", "DeleteResponse",
    "UserSummary", "UserPublic", "UserProfile",
    "MatchType", "MatchTypeFilter", "UserSearchFilters", "MatchCandidate",
    "MatchListResponse", "MatchDetailsResponse", "UserSearchResponse",
    "Connection", "ConnectionCreate", "ConnectionResponse", "ConnectionListResponse",
    "ConnectionStatusResponse", "ConnectionCancelResponse", "ConnectionDecision",
    "Vouch", "VouchCreate", "VouchResponse", "VouchListResponse", "UserVouchesResponse", "VouchDeleteResponse",
    "Message", "MessageCreate", "MessageResponse", "ConversationResponse",
    "ConversationSummary", "ConversationListResponse",
]
