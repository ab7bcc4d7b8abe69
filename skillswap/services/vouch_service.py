"""
Vouch service: endorsements between connected users.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging

from skillswap.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from skillswap.models.vouch import Vouch
from skillswap.repositories.user_repository import UserRepository
from skillswap.repositories.vouch_repository import VouchRepository
from skillswap.schemas.vouch import VouchCreate
from skillswap.services.connection_service import ConnectionService

logger = logging.getLogger(__name__)


class VouchService:
    """
    Service for creating and reading vouches.

    A user may vouch for another user at most once, and only while the two
    are connected (as decided by ConnectionService).
    """

    def __init__(
        self,
        vouch_repo: Optional[VouchRepository] = None,
        user_repo: Optional[UserRepository] = None,
        connection_service: Optional[ConnectionService] = None
    ):
        self.vouch_repo = vouch_repo or VouchRepository()
        self.user_repo = user_repo or UserRepository()
        self.connection_service = connection_service or ConnectionService()

    async def create_vouch(
        self,
        db: AsyncSession,
        voucher_id: UUID,
        data: VouchCreate
    ) -> Vouch:
        """
        Vouch for a connected user.

        Args:
            db: Active database session
            voucher_id: UUID of the user giving the vouch
            data: Target user, optional skill, comment and rating (1-5)

        Returns:
            Created Vouch with voucher and vouched loaded

        Raises:
            InvalidRequestError: If users try to vouch for themselves
            NotFoundError: If the vouched user does not exist
            ForbiddenError: If the users are not connected
            ConflictError: If the voucher already vouched for this user
        """
        if voucher_id == data.vouched_id:
            raise InvalidRequestError("Cannot vouch for yourself")

        if not await self.user_repo.exists(db, data.vouched_id):
            raise NotFoundError("User not found")

        if not await self.connection_service.is_connected(db, voucher_id, data.vouched_id):
            raise ForbiddenError("You must be connected to vouch for this user")

        if await self.vouch_repo.find(db, voucher_id, data.vouched_id):
            raise ConflictError("You have already vouched for this user")

        try:
            vouch = await self.vouch_repo.create(
                db,
                {
                    "voucher_id": voucher_id,
                    "vouched_id": data.vouched_id,
                    "skill_id": data.skill_id,
                    "comment": data.comment,
                    "rating": data.rating,
                },
            )
        except IntegrityError:
            raise ConflictError("You have already vouched for this user")

        logger.info(f"User {voucher_id} vouched for user {data.vouched_id} (rating {data.rating})")
        return await self.vouch_repo.get_with_users(db, vouch.id)

    async def get_user_vouches(self, db: AsyncSession, user_id: UUID) -> dict:
        """
        Vouches a user received, with count and average rating.

        Returns:
            Dictionary with ``vouches``, ``count`` and ``average_rating``
            (0.0 when there are none, otherwise rounded to one decimal)
        """
        vouches = await self.vouch_repo.list_received(db, user_id)
        count = len(vouches)
        average = round(sum(v.rating for v in vouches) / count, 1) if count else 0.0
        return {"vouches": vouches, "count": count, "average_rating": average}

    async def get_my_vouches(self, db: AsyncSession, user_id: UUID) -> list[Vouch]:
        return await self.vouch_repo.list_given(db, user_id)

    async def delete_vouch(self, db: AsyncSession, user_id: UUID, vouch_id: UUID) -> None:
        """Remove a vouch. Only the voucher may remove it."""
        vouch = await self.vouch_repo.get(db, vouch_id)
        if not vouch:
            raise NotFoundError("Vouch not found")

        if vouch.voucher_id != user_id:
            raise ForbiddenError("Not authorized to delete this vouch")

        await self.vouch_repo.delete(db, vouch_id)
        logger.info(f"User {user_id} deleted vouch {vouch_id}")
