from .user import User, ExchangePreference
from .skill import Category, Skill, UserSkill, SkillDirection, Proficiency
from .connection import Connection, ConnectionStatus
from .vouch import Vouch
from .message import Message

__all__ = [
    "User", "ExchangePreference",
    "Category", "Skill", "UserSkill", "SkillDirection", "Proficiency",
    "Connection", "ConnectionStatus",
    "Vouch", "Message",
]
