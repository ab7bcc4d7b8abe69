"""
Async factories for the ORM models.

Usage example (inside an async test with db_session fixture):

    user = await UserFactory.create_async(db_session)
    skill = await SkillFactory.create_async(db_session, name="Guitar")
    await UserSkillFactory.offered(db_session, user, skill)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from skillswap.core.security import get_password_hash
from skillswap.models.connection import Connection, ConnectionStatus
from skillswap.models.message import Message
from skillswap.models.skill import Category, Skill, SkillDirection, UserSkill, Proficiency
from skillswap.models.user import User
from skillswap.models.vouch import Vouch

# bcrypt is slow; hash once for every factory-built user
PASSWORD_HASH = get_password_hash("Password1")

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A fixed timestamp ``minutes`` after a base time, for deterministic ordering."""
    return _BASE_TIME + timedelta(minutes=minutes)


# ---------------------------------------------------------------------------
# Base async factory helper
# ---------------------------------------------------------------------------
class _AsyncFactory:
    """Minimal async factory helper.

    Subclasses declare ``_model`` (the ORM class) and override ``_defaults()``
    to supply default column values. Call ``create_async(session, **kwargs)``
    to insert a row and return the flushed instance.
    """

    _model: type

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {}

    @classmethod
    async def create_async(cls, session, **kwargs) -> Any:
        """Create and flush an ORM instance within the given session."""
        data = {**cls._defaults(), **kwargs}
        instance = cls._model(**data)
        session.add(instance)
        await session.flush()
        return instance

    @classmethod
    def build(cls, **kwargs) -> Any:
        """Build an unsaved ORM instance (no DB interaction)."""
        data = {**cls._defaults(), **kwargs}
        return cls._model(**data)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
class UserFactory(_AsyncFactory):
    _model = User

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        suffix = uuid.uuid4().hex[:8]
        return {
            "id": uuid.uuid4(),
            "email": f"user_{suffix}@example.com",
            "password_hash": PASSWORD_HASH,
            "first_name": "Test",
            "last_name": f"User {suffix}",
            "username": f"user_{suffix}",
            "location": "Lisbon, Portugal",
            "created_at": datetime.now(timezone.utc),
        }


class CategoryFactory(_AsyncFactory):
    _model = Category

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        suffix = uuid.uuid4().hex[:8]
        return {
            "id": uuid.uuid4(),
            "name": f"Category {suffix}",
            "description": "A test category",
        }


class SkillFactory(_AsyncFactory):
    _model = Skill

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        suffix = uuid.uuid4().hex[:8]
        return {
            "id": uuid.uuid4(),
            "name": f"Skill {suffix}",
            "category_id": None,
        }


class UserSkillFactory(_AsyncFactory):
    _model = UserSkill

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "user_id": None,  # caller must supply
            "skill_id": None,  # caller must supply
            "direction": SkillDirection.OFFERED,
        }

    @classmethod
    async def offered(cls, session, user: User, skill: Skill, **kwargs) -> UserSkill:
        kwargs.setdefault("proficiency", Proficiency.INTERMEDIATE)
        return await cls.create_async(
            session, user_id=user.id, skill_id=skill.id, direction=SkillDirection.OFFERED, **kwargs
        )

    @classmethod
    async def wanted(cls, session, user: User, skill: Skill, **kwargs) -> UserSkill:
        return await cls.create_async(
            session, user_id=user.id, skill_id=skill.id, direction=SkillDirection.WANTED, **kwargs
        )


class ConnectionFactory(_AsyncFactory):
    _model = Connection

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "sender_id": None,  # caller must supply
            "receiver_id": None,  # caller must supply
            "status": ConnectionStatus.PENDING,
        }


class VouchFactory(_AsyncFactory):
    _model = Vouch

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "voucher_id": None,  # caller must supply
            "vouched_id": None,  # caller must supply
            "rating": 5,
        }


class MessageFactory(_AsyncFactory):
    _model = Message

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "sender_id": None,  # caller must supply
            "receiver_id": None,  # caller must supply
            "content": "Hello!",
            "is_read": False,
            "created_at": datetime.now(timezone.utc),
        }
