"""
User repository: profile lookups with skill ledgers loaded, match candidate
scans and free-text user search.
"""

from __future__ import annotations
from typing import Iterable, Optional
from uuid import UUID
from sqlalchemy import select, and_, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from skillswap.models.user import User
from skillswap.models.skill import Category, Skill, UserSkill, SkillDirection
from skillswap.models.vouch import Vouch
from skillswap.schemas.match import UserSearchFilters
from .base import BaseRepository

logger = logging.getLogger(__name__)


def _has_ledger_entry(direction: SkillDirection, skill_ids: Iterable[UUID]):
    """Condition: the user has at least one ``direction`` entry for any of ``skill_ids``."""
    return User.user_skills.any(
        and_(
            UserSkill.direction == direction,
            UserSkill.skill_id.in_(list(skill_ids)),
        )
    )


def build_user_search_conditions(
    filters: UserSearchFilters,
    exclude_user_id: Optional[UUID] = None,
) -> list:
    """
    Turn optional search filters into a list of SQLAlchemy conditions.

    Each filter field contributes independently; unset fields contribute
    nothing. The result is meant to be AND-ed together.

    Args:
        filters: Search filters (query, category, location, skill_type)
        exclude_user_id: User to leave out of the results (the caller)

    Returns:
        List of SQLAlchemy boolean clauses

    Example:
        conditions = build_user_search_conditions(
            UserSearchFilters(query="ana", location="lisbon"), exclude_user_id=me.id
        )
        stmt = select(User).where(*conditions)
    """
    conditions: list = []

    if exclude_user_id is not None:
        conditions.append(User.id != exclude_user_id)

    if filters.location:
        conditions.append(User.location.icontains(filters.location, autoescape=True))

    if filters.query:
        # % and _ in user input match literally
        conditions.append(
            or_(
                User.first_name.icontains(filters.query, autoescape=True),
                User.last_name.icontains(filters.query, autoescape=True),
                User.username.icontains(filters.query, autoescape=True),
            )
        )

    if filters.category or filters.skill_type:
        entry_conditions = []
        if filters.skill_type:
            entry_conditions.append(UserSkill.direction == filters.skill_type)
        if filters.category:
            entry_conditions.append(
                UserSkill.skill.has(
                    Skill.category.has(func.lower(Category.name) == filters.category.lower())
                )
            )
        conditions.append(User.user_skills.any(and_(*entry_conditions)))

    return conditions


class UserRepository(BaseRepository[User]):
    """
    Repository for User with skill-ledger aware queries.

    Provides methods for:
    - Loading a user together with their skill ledger
    - Scanning other users who offer or want a set of skills
    - Filtered user search
    """

    def __init__(self):
        super().__init__(User)

    @staticmethod
    def _with_ledger(stmt):
        return stmt.options(
            selectinload(User.user_skills).joinedload(UserSkill.skill).joinedload(Skill.category)
        ).execution_options(populate_existing=True)

    async def get_with_skills(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> Optional[User]:
        """
        Get a user with their skill ledger loaded.

        Args:
            db: Active database session
            user_id: UUID of the user

        Returns:
            User with ``user_skills`` (and each entry's skill) loaded, or None
        """
        try:
            stmt = self._with_ledger(select(User).where(User.id == user_id))
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user {user_id} with skills: {e}")
            raise

    async def get_profile(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> Optional[User]:
        """Get a user with skill ledger and received vouches (with vouchers) loaded."""
        try:
            stmt = self._with_ledger(select(User).where(User.id == user_id)).options(
                selectinload(User.received_vouches).selectinload(Vouch.voucher)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching profile for user {user_id}: {e}")
            raise

    async def find_match_candidates(
        self,
        db: AsyncSession,
        exclude_user_id: UUID,
        offering: Optional[Iterable[UUID]] = None,
        wanting: Optional[Iterable[UUID]] = None,
    ) -> list[User]:
        """
        Find other users whose ledger intersects the given skill sets.

        Every given criterion must hold: ``offering`` requires an OFFERED
        entry in that set, ``wanting`` a WANTED entry in that set. An empty
        set can never be satisfied, so no query is issued.

        Args:
            db: Active database session
            exclude_user_id: The user matches are computed for
            offering: Skill ids the candidate must offer at least one of
            wanting: Skill ids the candidate must want at least one of

        Returns:
            Candidates with their ledgers loaded, ordered by (created_at, id)

        Example:
            teachers = await repo.find_match_candidates(db, me.id, offering=my_wanted)
        """
        conditions = [User.id != exclude_user_id]
        if offering is not None:
            offering = set(offering)
            if not offering:
                return []
            conditions.append(_has_ledger_entry(SkillDirection.OFFERED, offering))
        if wanting is not None:
            wanting = set(wanting)
            if not wanting:
                return []
            conditions.append(_has_ledger_entry(SkillDirection.WANTED, wanting))

        try:
            stmt = self._with_ledger(
                select(User).where(and_(*conditions)).order_by(User.created_at, User.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error scanning match candidates for user {exclude_user_id}: {e}")
            raise

    async def search(
        self,
        db: AsyncSession,
        filters: UserSearchFilters,
        exclude_user_id: UUID,
        limit: int = 50
    ) -> list[User]:
        """
        Search users by name/handle, location and ledger category/direction.

        Args:
            db: Active database session
            filters: Search filters
            exclude_user_id: The searching user
            limit: Maximum number of users returned

        Returns:
            Matching users with ledgers loaded
        """
        try:
            conditions = build_user_search_conditions(filters, exclude_user_id)
            stmt = self._with_ledger(
                select(User).where(*conditions).order_by(User.created_at, User.id).limit(limit)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error searching users: {e}")
            raise
