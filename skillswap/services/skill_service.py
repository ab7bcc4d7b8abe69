"""
Skill service: the shared skill catalogue and each user's skill ledger.

Ledger entries are the input to matching; this service keeps them
well-formed (one entry per user, skill and direction; proficiency only on
OFFERED entries).
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging

from skillswap.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from skillswap.models.skill import Category, Skill, SkillDirection, UserSkill
from skillswap.repositories.skill_repository import (
    CategoryRepository,
    SkillRepository,
    UserSkillRepository,
)
from skillswap.schemas.skill import UserSkillCreate, UserSkillUpdate

logger = logging.getLogger(__name__)


class SkillService:
    """Service for the skill catalogue and skill ledger entries."""

    def __init__(
        self,
        skill_repo: Optional[SkillRepository] = None,
        category_repo: Optional[CategoryRepository] = None,
        user_skill_repo: Optional[UserSkillRepository] = None
    ):
        self.skill_repo = skill_repo or SkillRepository()
        self.category_repo = category_repo or CategoryRepository()
        self.user_skill_repo = user_skill_repo or UserSkillRepository()

    async def list_skills(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
        search: Optional[str] = None
    ) -> list[Skill]:
        return await self.skill_repo.list_skills(db, category=category, search=search)

    async def list_categories(self, db: AsyncSession) -> list[Category]:
        return await self.category_repo.list_all(db)

    async def _get_or_create_category(self, db: AsyncSession, name: str) -> Category:
        category = await self.category_repo.get_by_name(db, name)
        if category:
            return category
        try:
            category = await self.category_repo.create(db, {"name": name})
        except IntegrityError:
            # Another request created it between the lookup and the insert
            existing = await self.category_repo.get_by_name(db, name)
            if existing is None:
                raise
            return existing
        logger.info(f"Created category '{name}'")
        return category

    async def create_skill(
        self,
        db: AsyncSession,
        name: str,
        category: Optional[str] = None,
        description: Optional[str] = None
    ) -> tuple[Skill, bool]:
        """
        Return the skill with this name, creating it if it does not exist.

        Args:
            db: Active database session
            name: Skill name (exact match)
            category: Category name, created if missing; ignored for existing skills
            description: Optional description for a new skill

        Returns:
            Tuple of (skill, created)

        Example:
            skill, created = await service.create_skill(db, "Python", "Technology")
            status_code = 201 if created else 200
        """
        existing = await self.skill_repo.get_by_name(db, name)
        if existing:
            return existing, False

        category_id = None
        if category:
            category_id = (await self._get_or_create_category(db, category)).id

        try:
            skill = await self.skill_repo.create(
                db,
                {"name": name, "category_id": category_id, "description": description},
            )
        except IntegrityError:
            existing = await self.skill_repo.get_by_name(db, name)
            if existing is None:
                raise
            logger.info(f"Skill '{name}' was created concurrently; returning it")
            return existing, False
        logger.info(f"Created skill '{name}' ({skill.id})")
        return await self.skill_repo.get(db, skill.id), True

    async def get_user_skills(self, db: AsyncSession, user_id: UUID) -> dict:
        """
        A user's ledger split by direction.

        Returns:
            Dictionary with ``skills_offered`` and ``skills_wanted``, newest first
        """
        entries = await self.user_skill_repo.list_for_user(db, user_id)
        return {
            "skills_offered": [e for e in entries if e.direction == SkillDirection.OFFERED],
            "skills_wanted": [e for e in entries if e.direction == SkillDirection.WANTED],
        }

    async def add_user_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserSkillCreate
    ) -> UserSkill:
        """
        Add an OFFERED or WANTED entry to the user's ledger.

        The skill is referenced by ``skill_id`` or by ``skill_name``; a name
        not yet in the catalogue is added to it.

        Raises:
            InvalidRequestError: If neither skill_id nor skill_name is given
            NotFoundError: If skill_id does not exist
            ConflictError: If the user already has this skill in this direction
        """
        if data.skill_id:
            skill = await self.skill_repo.get(db, data.skill_id)
            if not skill:
                raise NotFoundError("Skill not found")
        elif data.skill_name and data.skill_name.strip():
            skill, _ = await self.create_skill(db, data.skill_name.strip(), data.category)
        else:
            raise InvalidRequestError("Either skill_id or skill_name is required")

        if await self.user_skill_repo.find_entry(db, user_id, skill.id, data.direction):
            raise ConflictError("You already have this skill added")

        # Proficiency describes what a user can teach
        proficiency = data.proficiency if data.direction == SkillDirection.OFFERED else None

        try:
            entry = await self.user_skill_repo.create(
                db,
                {
                    "user_id": user_id,
                    "skill_id": skill.id,
                    "direction": data.direction,
                    "proficiency": proficiency,
                    "note": data.note,
                },
            )
        except IntegrityError:
            raise ConflictError("You already have this skill added")

        logger.info(f"User {user_id} added {data.direction.value} skill {skill.id}")
        return await self.user_skill_repo.get_with_skill(db, entry.id)

    async def _get_owned_entry(self, db: AsyncSession, user_id: UUID, entry_id: UUID) -> UserSkill:
        entry = await self.user_skill_repo.get(db, entry_id)
        if not entry or entry.user_id != user_id:
            raise NotFoundError("Skill not found")
        return entry

    async def update_user_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        entry_id: UUID,
        data: UserSkillUpdate
    ) -> UserSkill:
        """
        Update proficiency or note on one of the user's own entries.

        Entries owned by someone else are reported as not found.
        """
        entry = await self._get_owned_entry(db, user_id, entry_id)

        changes = data.model_dump(exclude_unset=True)
        if entry.direction == SkillDirection.WANTED:
            changes.pop("proficiency", None)

        await self.user_skill_repo.update(db, entry, changes)
        return await self.user_skill_repo.get_with_skill(db, entry_id)

    async def delete_user_skill(self, db: AsyncSession, user_id: UUID, entry_id: UUID) -> None:
        await self._get_owned_entry(db, user_id, entry_id)
        await self.user_skill_repo.delete(db, entry_id)
        logger.info(f"User {user_id} removed skill ledger entry {entry_id}")
