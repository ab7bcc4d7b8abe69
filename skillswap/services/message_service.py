"""
Message service: direct messages between connected users.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from skillswap.core.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from skillswap.models.message import Message
from skillswap.repositories.message_repository import MessageRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.services.connection_service import ConnectionService

logger = logging.getLogger(__name__)


class MessageService:
    """Service for sending and reading messages. Sending requires an ACCEPTED connection."""

    def __init__(
        self,
        message_repo: Optional[MessageRepository] = None,
        user_repo: Optional[UserRepository] = None,
        connection_service: Optional[ConnectionService] = None
    ):
        self.message_repo = message_repo or MessageRepository()
        self.user_repo = user_repo or UserRepository()
        self.connection_service = connection_service or ConnectionService()

    async def send_message(
        self,
        db: AsyncSession,
        sender_id: UUID,
        receiver_id: UUID,
        content: str
    ) -> Message:
        """
        Send a message to a connected user.

        Raises:
            InvalidRequestError: If users message themselves
            NotFoundError: If the receiver does not exist
            ForbiddenError: If the users are not connected
        """
        if sender_id == receiver_id:
            raise InvalidRequestError("Cannot send a message to yourself")

        if not await self.user_repo.exists(db, receiver_id):
            raise NotFoundError("User not found")

        if not await self.connection_service.is_connected(db, sender_id, receiver_id):
            raise ForbiddenError("You must be connected to send messages")

        message = await self.message_repo.create(
            db,
            {"sender_id": sender_id, "receiver_id": receiver_id, "content": content},
        )
        logger.info(f"User {sender_id} sent message {message.id} to user {receiver_id}")
        return await self.message_repo.get_with_users(db, message.id)

    async def get_conversation(
        self,
        db: AsyncSession,
        user_id: UUID,
        other_user_id: UUID
    ) -> list[Message]:
        """
        Messages between two users, oldest first.

        Everything the other user sent to ``user_id`` is marked read before
        the conversation is loaded.
        """
        if not await self.user_repo.exists(db, other_user_id):
            raise NotFoundError("User not found")

        marked = await self.message_repo.mark_read(db, other_user_id, user_id)
        if marked:
            logger.debug(f"Marked {marked} messages from {other_user_id} to {user_id} as read")

        return await self.message_repo.get_conversation(db, user_id, other_user_id)

    async def get_conversations(self, db: AsyncSession, user_id: UUID) -> list[dict]:
        """
        One summary per conversation partner, most recent conversation first.

        Returns:
            List of dictionaries with ``user`` (the partner), ``last_message``
            and ``unread_count`` (messages from the partner not yet read)
        """
        messages = await self.message_repo.list_involving(db, user_id)

        conversations: dict[UUID, dict] = {}
        for message in messages:
            incoming = message.receiver_id == user_id
            partner = message.sender if incoming else message.receiver
            summary = conversations.get(partner.id)
            if summary is None:
                # Messages arrive newest first, so the first one seen is the latest
                summary = {"user": partner, "last_message": message, "unread_count": 0}
                conversations[partner.id] = summary
            if incoming and not message.is_read:
                summary["unread_count"] += 1

        return list(conversations.values())
