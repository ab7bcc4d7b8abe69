from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.core.database import get_db
from skillswap.api.deps import get_current_user, get_message_service
from skillswap.models.user import User
from skillswap.schemas.message import (
    ConversationListResponse,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
)
from skillswap.services.message_service import MessageService
import uuid

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
    db: AsyncSession = Depends(get_db)
):
    """Send a message to a connected user"""
    message = await service.send_message(
        db, current_user.id, message_data.receiver_id, message_data.content
    )
    await db.commit()
    return {"message": message}


@router.get("/conversations", response_model=ConversationListResponse)
async def get_conversations(
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
    db: AsyncSession = Depends(get_db)
):
    """One entry per conversation partner, most recent first"""
    return {"conversations": await service.get_conversations(db, current_user.id)}


@router.get("/conversation/{other_user_id}", response_model=ConversationResponse)
async def get_conversation(
    other_user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
    db: AsyncSession = Depends(get_db)
):
    """Messages with one user, oldest first; incoming messages are marked read"""
    messages = await service.get_conversation(db, current_user.id, other_user_id)
    await db.commit()
    return {"messages": messages}
