from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from skillswap.models.vouch import Vouch
from .base import BaseRepository

logger = logging.getLogger(__name__)


class VouchRepository(BaseRepository[Vouch]):
    def __init__(self):
        super().__init__(Vouch)

    async def find(
        self,
        db: AsyncSession,
        voucher_id: UUID,
        vouched_id: UUID
    ) -> Optional[Vouch]:
        """The vouch ``voucher_id`` gave ``vouched_id``, if any."""
        try:
            stmt = select(Vouch).where(
                and_(Vouch.voucher_id == voucher_id, Vouch.vouched_id == vouched_id)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching vouch from {voucher_id} to {vouched_id}: {e}")
            raise

    async def get_with_users(self, db: AsyncSession, vouch_id: UUID) -> Optional[Vouch]:
        try:
            stmt = (
                select(Vouch)
                .where(Vouch.id == vouch_id)
                .options(selectinload(Vouch.voucher), selectinload(Vouch.vouched))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching vouch {vouch_id}: {e}")
            raise

    async def list_received(self, db: AsyncSession, user_id: UUID) -> list[Vouch]:
        """Vouches a user received, newest first."""
        try:
            stmt = (
                select(Vouch)
                .where(Vouch.vouched_id == user_id)
                .options(selectinload(Vouch.voucher), selectinload(Vouch.vouched))
                .order_by(desc(Vouch.created_at), Vouch.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing vouches received by {user_id}: {e}")
            raise

    async def list_given(self, db: AsyncSession, user_id: UUID) -> list[Vouch]:
        """Vouches a user gave, newest first."""
        try:
            stmt = (
                select(Vouch)
                .where(Vouch.voucher_id == user_id)
                .options(selectinload(Vouch.voucher), selectinload(Vouch.vouched))
                .order_by(desc(Vouch.created_at), Vouch.id)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing vouches given by {user_id}: {e}")
            raise
