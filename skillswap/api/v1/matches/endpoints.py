from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from skillswap.core.database import get_db
from skillswap.api.deps import get_current_user, get_match_service
from skillswap.models.skill import SkillDirection
from skillswap.models.user import User
from skillswap.schemas.match import (
    MatchCandidate,
    MatchDetailsResponse,
    MatchListResponse,
    MatchTypeFilter,
    UserSearchFilters,
    UserSearchResponse,
)
from skillswap.schemas.skill import UserSkill as UserSkillSchema
from skillswap.schemas.user import UserProfile, UserPublic
from skillswap.services.match_service import MatchService
import uuid

router = APIRouter()


@router.get("", response_model=MatchListResponse)
async def get_matches(
    type: Optional[MatchTypeFilter] = Query(None, description="perfect, teachers or learners"),
    current_user: User = Depends(get_current_user),
    service: MatchService = Depends(get_match_service),
    db: AsyncSession = Depends(get_db)
):
    """Ranked skill-swap matches for the current user"""
    ranked = await service.compute_matches(db, current_user.id, type)
    matches = [
        MatchCandidate(
            **UserPublic.model_validate(candidate.user).model_dump(),
            match_type=candidate.match_type,
            match_score=candidate.match_score,
        )
        for candidate in ranked
    ]
    return MatchListResponse(matches=matches)


# Declared before /{target_user_id} so "search" is not parsed as a user id
@router.get("/search", response_model=UserSearchResponse)
async def search_users(
    query: Optional[str] = None,
    category: Optional[str] = None,
    location: Optional[str] = None,
    skill_type: Optional[SkillDirection] = None,
    current_user: User = Depends(get_current_user),
    service: MatchService = Depends(get_match_service),
    db: AsyncSession = Depends(get_db)
):
    """Search other users by name, location, skill category and direction"""
    filters = UserSearchFilters(
        query=query, category=category, location=location, skill_type=skill_type
    )
    users = await service.search_users(db, current_user.id, filters)
    return UserSearchResponse(users=[UserPublic.model_validate(u) for u in users])


@router.get("/{target_user_id}", response_model=MatchDetailsResponse)
async def get_match_details(
    target_user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: MatchService = Depends(get_match_service),
    db: AsyncSession = Depends(get_db)
):
    """How the current user and one other user complement each other"""
    target_user, comparison = await service.get_match_details(db, current_user.id, target_user_id)
    return MatchDetailsResponse(
        user=UserProfile.model_validate(target_user),
        match_type=comparison.match_type,
        they_can_teach_me=[UserSkillSchema.model_validate(e) for e in comparison.they_can_teach_me],
        i_can_teach_them=[UserSkillSchema.model_validate(e) for e in comparison.i_can_teach_them],
    )
