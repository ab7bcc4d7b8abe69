from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.core.database import get_db
from skillswap.api.deps import get_current_user, get_vouch_service
from skillswap.models.user import User
from skillswap.schemas.vouch import (
    UserVouchesResponse,
    VouchCreate,
    VouchDeleteResponse,
    VouchListResponse,
    VouchResponse,
)
from skillswap.services.vouch_service import VouchService
import uuid

router = APIRouter()


@router.post("", response_model=VouchResponse, status_code=status.HTTP_201_CREATED)
async def create_vouch(
    vouch_data: VouchCreate,
    current_user: User = Depends(get_current_user),
    service: VouchService = Depends(get_vouch_service),
    db: AsyncSession = Depends(get_db)
):
    """Vouch for a connected user"""
    vouch = await service.create_vouch(db, current_user.id, vouch_data)
    await db.commit()
    return {"vouch": vouch}


@router.get("/me", response_model=VouchListResponse)
async def get_my_vouches(
    current_user: User = Depends(get_current_user),
    service: VouchService = Depends(get_vouch_service),
    db: AsyncSession = Depends(get_db)
):
    """Vouches the current user has given"""
    return {"vouches": await service.get_my_vouches(db, current_user.id)}


@router.get("/user/{user_id}", response_model=UserVouchesResponse)
async def get_user_vouches(
    user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: VouchService = Depends(get_vouch_service),
    db: AsyncSession = Depends(get_db)
):
    """Vouches a user has received, with count and average rating"""
    return await service.get_user_vouches(db, user_id)


@router.delete("/{vouch_id}", response_model=VouchDeleteResponse)
async def delete_vouch(
    vouch_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: VouchService = Depends(get_vouch_service),
    db: AsyncSession = Depends(get_db)
):
    """Remove a vouch the current user gave"""
    await service.delete_vouch(db, current_user.id, vouch_id)
    await db.commit()
    return {"message": "Vouch deleted successfully"}
