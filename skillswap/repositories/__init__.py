# Repositories package
from .base import BaseRepository
from .user_repository import UserRepository, build_user_search_conditions
from .skill_repository import CategoryRepository, SkillRepository, UserSkillRepository
from .connection_repository import ConnectionRepository
from .vouch_repository import VouchRepository
from .message_repository import MessageRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "build_user_search_conditions",
    "CategoryRepository",
    "SkillRepository",
    "UserSkillRepository",
    "ConnectionRepository",
    "VouchRepository",
    "MessageRepository",
]
