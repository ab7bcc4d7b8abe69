from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, update, and_, or_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from skillswap.models.message import Message
from .base import BaseRepository

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    def __init__(self):
        super().__init__(Message)

    @staticmethod
    def _between(user_a: UUID, user_b: UUID):
        return or_(
            and_(Message.sender_id == user_a, Message.receiver_id == user_b),
            and_(Message.sender_id == user_b, Message.receiver_id == user_a),
        )

    async def get_with_users(self, db: AsyncSession, message_id: UUID) -> Optional[Message]:
        try:
            stmt = (
                select(Message)
                .where(Message.id == message_id)
                .options(selectinload(Message.sender), selectinload(Message.receiver))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching message {message_id}: {e}")
            raise

    async def get_conversation(
        self,
        db: AsyncSession,
        user_a: UUID,
        user_b: UUID
    ) -> list[Message]:
        """Messages exchanged between two users, oldest first."""
        try:
            stmt = (
                select(Message)
                .where(self._between(user_a, user_b))
                .options(selectinload(Message.sender), selectinload(Message.receiver))
                .order_by(Message.created_at, Message.id)
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching conversation between {user_a} and {user_b}: {e}")
            raise

    async def mark_read(
        self,
        db: AsyncSession,
        sender_id: UUID,
        receiver_id: UUID
    ) -> int:
        """Mark everything ``sender_id`` sent to ``receiver_id`` as read. Returns rows updated."""
        try:
            stmt = (
                update(Message)
                .where(
                    and_(
                        Message.sender_id == sender_id,
                        Message.receiver_id == receiver_id,
                        Message.is_read == False,  # noqa: E712
                    )
                )
                .values(is_read=True)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            await db.flush()
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error marking messages from {sender_id} to {receiver_id} as read: {e}")
            await db.rollback()
            raise

    async def list_involving(self, db: AsyncSession, user_id: UUID) -> list[Message]:
        """Every message the user sent or received, newest first."""
        try:
            stmt = (
                select(Message)
                .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
                .options(selectinload(Message.sender), selectinload(Message.receiver))
                .order_by(desc(Message.created_at), desc(Message.id))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing messages for user {user_id}: {e}")
            raise
