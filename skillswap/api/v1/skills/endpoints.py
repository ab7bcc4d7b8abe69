from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from skillswap.core.database import get_db
from skillswap.api.deps import get_current_user, get_skill_service
from skillswap.models.user import User
from skillswap.schemas.skill import (
    CategoryListResponse,
    DeleteResponse,
    SkillCreate,
    SkillListResponse,
    SkillResponse,
    UserSkillCreate,
    UserSkillResponse,
    UserSkillsResponse,
    UserSkillUpdate,
)
from skillswap.services.skill_service import SkillService
import uuid

router = APIRouter()


@router.get("", response_model=SkillListResponse)
async def list_skills(
    category: Optional[str] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """Skill catalogue, optionally filtered by category name or name substring"""
    skills = await service.list_skills(db, category=category, search=search)
    return {"skills": skills}


@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(
    skill_data: SkillCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """Add a skill to the catalogue; returns the existing skill if the name is taken"""
    skill, created = await service.create_skill(
        db, skill_data.name, skill_data.category, skill_data.description
    )
    if created:
        await db.commit()
    else:
        response.status_code = status.HTTP_200_OK
    return {"skill": skill}


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """All skill categories"""
    return {"categories": await service.list_categories(db)}


@router.get("/user", response_model=UserSkillsResponse)
async def get_my_skills(
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """The current user's skill ledger, split into offered and wanted"""
    return await service.get_user_skills(db, current_user.id)


@router.post("/user", response_model=UserSkillResponse, status_code=status.HTTP_201_CREATED)
async def add_my_skill(
    entry_data: UserSkillCreate,
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """Add an offered or wanted skill to the current user's ledger"""
    entry = await service.add_user_skill(db, current_user.id, entry_data)
    await db.commit()
    return {"user_skill": entry}


@router.put("/user/{entry_id}", response_model=UserSkillResponse)
async def update_my_skill(
    entry_id: uuid.UUID,
    entry_data: UserSkillUpdate,
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """Update proficiency or note on one of the current user's ledger entries"""
    entry = await service.update_user_skill(db, current_user.id, entry_id, entry_data)
    await db.commit()
    return {"user_skill": entry}


@router.delete("/user/{entry_id}", response_model=DeleteResponse)
async def delete_my_skill(
    entry_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: SkillService = Depends(get_skill_service),
    db: AsyncSession = Depends(get_db)
):
    """Remove an entry from the current user's ledger"""
    await service.delete_user_skill(db, current_user.id, entry_id)
    await db.commit()
    return {"message": "Skill removed successfully"}
