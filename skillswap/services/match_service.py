"""
Match service: computes skill-swap matches, pairwise match details and
filtered user search.

Matching is read-only and advisory. It reads the current user's ledger and
then scans other users once per category, so a ledger change made by
someone else mid-computation may or may not be reflected.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from skillswap.core.config import settings
from skillswap.core.exceptions import NotFoundError
from skillswap.models.skill import SkillDirection
from skillswap.models.user import User
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.match import MatchType, MatchTypeFilter, UserSearchFilters
from skillswap.services.matching import (
    MatchAccumulator,
    PairComparison,
    ScoredCandidate,
    categories_for_filter,
    classify_pair,
    skill_ids,
)

logger = logging.getLogger(__name__)


class MatchService:
    """
    Service for skill-based matching between users.

    Categories are computed in PERFECT_SWAP, TEACHER, LEARNER order and fed
    into a MatchAccumulator, so a user qualifying for several categories is
    reported once under the first one computed.
    """

    def __init__(
        self,
        user_repo: Optional[UserRepository] = None,
        search_limit: Optional[int] = None
    ):
        """
        Initialize service with repositories.

        Args:
            user_repo: UserRepository instance (creates new if None)
            search_limit: Maximum users returned by search_users (defaults to settings)
        """
        self.user_repo = user_repo or UserRepository()
        self.search_limit = settings.match_search_limit if search_limit is None else search_limit

    async def _load_user(self, db: AsyncSession, user_id: UUID) -> User:
        user = await self.user_repo.get_with_skills(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def compute_matches(
        self,
        db: AsyncSession,
        current_user_id: UUID,
        type_filter: Optional[MatchTypeFilter] = None
    ) -> list[ScoredCandidate]:
        """
        Compute ranked, deduplicated matches for a user.

        Args:
            db: Active database session
            current_user_id: UUID of the user matches are computed for
            type_filter: Restrict to one category (perfect, teachers, learners);
                None computes all three

        Returns:
            Candidates sorted by descending score, ties in scan order

        Raises:
            NotFoundError: If the current user does not exist

        Example:
            matches = await service.compute_matches(db, user.id)
            for m in matches:
                print(m.user.username, m.match_type, m.match_score)
        """
        current_user = await self._load_user(db, current_user_id)
        offered = skill_ids(current_user.user_skills, SkillDirection.OFFERED)
        wanted = skill_ids(current_user.user_skills, SkillDirection.WANTED)

        accumulator = MatchAccumulator()
        for category in categories_for_filter(type_filter):
            if category == MatchType.PERFECT_SWAP:
                candidates = await self.user_repo.find_match_candidates(
                    db, current_user_id, offering=wanted, wanting=offered
                )
            elif category == MatchType.TEACHER:
                candidates = await self.user_repo.find_match_candidates(
                    db, current_user_id, offering=wanted
                )
            else:
                candidates = await self.user_repo.find_match_candidates(
                    db, current_user_id, wanting=offered
                )
            added = accumulator.add(category, candidates)
            logger.debug(
                f"Match scan for user {current_user_id}: {category.value} "
                f"found {len(candidates)}, kept {added}"
            )

        ranked = accumulator.ranked()
        logger.info(
            f"Computed {len(ranked)} matches for user {current_user_id} "
            f"(filter: {type_filter.value if type_filter else 'all'})"
        )
        return ranked

    async def get_match_details(
        self,
        db: AsyncSession,
        current_user_id: UUID,
        target_user_id: UUID
    ) -> tuple[User, PairComparison]:
        """
        Compare the current user's ledger with one specific user.

        Args:
            db: Active database session
            current_user_id: UUID of the viewer
            target_user_id: UUID of the user being viewed

        Returns:
            Tuple of (target user with ledger and received vouches loaded,
            PairComparison)

        Raises:
            NotFoundError: If either user does not exist
        """
        current_user = await self.user_repo.get_with_skills(db, current_user_id)
        if not current_user:
            raise NotFoundError("User not found")
        # Loading the profile refreshes the viewer too when they vouched for
        # the target, which unloads their ledger
        my_entries = list(current_user.user_skills)

        target_user = await self.user_repo.get_profile(db, target_user_id)
        if not target_user:
            raise NotFoundError("User not found")

        comparison = classify_pair(my_entries, target_user.user_skills)
        return target_user, comparison

    async def search_users(
        self,
        db: AsyncSession,
        current_user_id: UUID,
        filters: UserSearchFilters
    ) -> list[User]:
        """
        Search other users by name, location and ledger category/direction.

        Results are capped at ``search_limit`` with no cursor; callers needing
        more must narrow the filters.
        """
        users = await self.user_repo.search(
            db, filters, exclude_user_id=current_user_id, limit=self.search_limit
        )
        logger.info(f"User search by {current_user_id} returned {len(users)} users")
        return users
