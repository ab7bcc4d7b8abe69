from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from skillswap.core.database import get_db
from skillswap.api.deps import get_current_user, get_connection_service
from skillswap.models.connection import ConnectionStatus
from skillswap.models.user import User
from skillswap.schemas.connection import (
    ConnectionCancelResponse,
    ConnectionCreate,
    ConnectionDecision,
    ConnectionListResponse,
    ConnectionResponse,
    ConnectionStatusResponse,
)
from skillswap.services.connection_service import ConnectionService
import uuid

router = APIRouter()


@router.post("/request", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
async def request_connection(
    request_data: ConnectionCreate,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """Send a connection request to another user"""
    connection = await service.request_connection(
        db, current_user.id, request_data.receiver_id, request_data.message
    )
    await db.commit()
    return {"connection": connection}


@router.get("", response_model=ConnectionListResponse)
async def list_connections(
    status: Optional[ConnectionStatus] = None,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """The current user's connections, grouped as sent, received and accepted"""
    return await service.list_connections(db, current_user.id, status)


@router.get("/status/{target_user_id}", response_model=ConnectionStatusResponse)
async def get_connection_status(
    target_user_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """Connection state between the current user and another user"""
    return await service.get_status(db, current_user.id, target_user_id)


@router.put("/{connection_id}/accept", response_model=ConnectionResponse)
async def accept_connection(
    connection_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """Accept a pending request (receiver only)"""
    connection = await service.respond_to_connection(
        db, current_user.id, connection_id, ConnectionDecision.ACCEPT
    )
    await db.commit()
    return {"connection": connection}


@router.put("/{connection_id}/reject", response_model=ConnectionResponse)
async def reject_connection(
    connection_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """Reject a pending request (receiver only)"""
    connection = await service.respond_to_connection(
        db, current_user.id, connection_id, ConnectionDecision.REJECT
    )
    await db.commit()
    return {"connection": connection}


@router.delete("/{connection_id}/cancel", response_model=ConnectionCancelResponse)
async def cancel_connection(
    connection_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: ConnectionService = Depends(get_connection_service),
    db: AsyncSession = Depends(get_db)
):
    """Withdraw a pending request (sender only)"""
    await service.cancel_connection(db, current_user.id, connection_id)
    await db.commit()
    return {"message": "Connection request cancelled"}
