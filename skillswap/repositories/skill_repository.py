"""
Skill catalogue and skill ledger repositories.

SkillRepository handles the canonical skill list and categories;
UserSkillRepository handles per-user OFFERED/WANTED entries.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, and_, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy.exc import SQLAlchemyError
import logging

from skillswap.models.skill import Category, Skill, UserSkill, SkillDirection
from .base import BaseRepository

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[Category]):
    def __init__(self):
        super().__init__(Category)

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Category]:
        """Case-insensitive lookup by category name."""
        try:
            stmt = select(Category).where(func.lower(Category.name) == name.lower())
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching category '{name}': {e}")
            raise

    async def list_all(self, db: AsyncSession) -> list[Category]:
        try:
            result = await db.execute(select(Category).order_by(Category.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing categories: {e}")
            raise


class SkillRepository(BaseRepository[Skill]):
    def __init__(self):
        super().__init__(Skill)

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Skill]:
        """Exact lookup by skill name (names are unique)."""
        try:
            stmt = select(Skill).where(Skill.name == name)
            result = await db.execute(stmt)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching skill '{name}': {e}")
            raise

    async def list_skills(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
        search: Optional[str] = None
    ) -> list[Skill]:
        """
        List skills ordered by name.

        Args:
            db: Active database session
            category: Optional category name (case-insensitive)
            search: Optional case-insensitive substring of the skill name

        Returns:
            List of skills with category loaded
        """
        try:
            stmt = select(Skill).options(joinedload(Skill.category)).order_by(Skill.name)
            if category:
                stmt = stmt.where(Skill.category.has(func.lower(Category.name) == category.lower()))
            if search:
                stmt = stmt.where(Skill.name.icontains(search, autoescape=True))
            result = await db.execute(stmt)
            return list(result.unique().scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing skills: {e}")
            raise


class UserSkillRepository(BaseRepository[UserSkill]):
    """
    Repository for skill ledger entries.

    Uniqueness of (user_id, skill_id, direction) is enforced by the
    ``unique_user_skill_direction`` constraint; ``find_entry`` is the
    friendly pre-check.
    """

    def __init__(self):
        super().__init__(UserSkill)

    async def get_with_skill(self, db: AsyncSession, entry_id: UUID) -> Optional[UserSkill]:
        try:
            stmt = (
                select(UserSkill)
                .where(UserSkill.id == entry_id)
                .options(joinedload(UserSkill.skill).joinedload(Skill.category))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching skill ledger entry {entry_id}: {e}")
            raise

    async def find_entry(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
        direction: SkillDirection
    ) -> Optional[UserSkill]:
        try:
            stmt = select(UserSkill).where(
                and_(
                    UserSkill.user_id == user_id,
                    UserSkill.skill_id == skill_id,
                    UserSkill.direction == direction,
                )
            )
            result = await db.execute(stmt)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error checking ledger entry for user {user_id}, skill {skill_id}: {e}")
            raise

    async def list_for_user(self, db: AsyncSession, user_id: UUID) -> list[UserSkill]:
        """All ledger entries of a user, newest first."""
        try:
            stmt = (
                select(UserSkill)
                .where(UserSkill.user_id == user_id)
                .options(joinedload(UserSkill.skill).joinedload(Skill.category))
                .order_by(desc(UserSkill.created_at), UserSkill.id)
            )
            result = await db.execute(stmt)
            return list(result.unique().scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing ledger entries for user {user_id}: {e}")
            raise
