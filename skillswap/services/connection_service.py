"""
Connection service: the request lifecycle between two users and the single
authority on whether two users are connected.

States per unordered pair:
    NONE -> PENDING            (sender requests)
    PENDING -> ACCEPTED        (receiver accepts)
    PENDING -> REJECTED        (receiver rejects)
    PENDING -> NONE            (sender cancels; the record is deleted)

ACCEPTED and REJECTED records are never removed here, so they keep
occupying the pair: a rejected sender cannot ask again.
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
from skillswap.models.connection import Connection, ConnectionStatus
from skillswap.repositories.connection_repository import ConnectionRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.connection import ConnectionDecision

logger = logging.getLogger(__name__)

NO_CONNECTION = "NONE"

_DECISION_TO_STATUS = {
    ConnectionDecision.ACCEPT: ConnectionStatus.ACCEPTED,
    ConnectionDecision.REJECT: ConnectionStatus.REJECTED,
}


class ConnectionService:
    """
    Service enforcing the connection state machine.

    Every transition is checked in order: existence (NotFoundError), caller
    role (ForbiddenError), current state (ConflictError). The write itself
    is conditional on PENDING, so a request that loses a race still gets
    ConflictError instead of silently overwriting.
    """

    def __init__(
        self,
        connection_repo: Optional[ConnectionRepository] = None,
        user_repo: Optional[UserRepository] = None
    ):
        """
        Initialize service with repositories.

        Args:
            connection_repo: ConnectionRepository instance (creates new if None)
            user_repo: UserRepository instance (creates new if None)
        """
        self.connection_repo = connection_repo or ConnectionRepository()
        self.user_repo = user_repo or UserRepository()

    async def request_connection(
        self,
        db: AsyncSession,
        sender_id: UUID,
        receiver_id: UUID,
        message: Optional[str] = None
    ) -> Connection:
        """
        Create a PENDING connection request.

        Args:
            db: Active database session
            sender_id: UUID of the requesting user
            receiver_id: UUID of the user being asked
            message: Optional note shown to the receiver

        Returns:
            Created Connection with sender and receiver loaded

        Raises:
            InvalidRequestError: If sender and receiver are the same user
            NotFoundError: If the receiver does not exist
            ConflictError: If any record already exists for the pair

        Example:
            connection = await service.request_connection(db, me.id, other.id, "Hi!")
            await db.commit()
        """
        if sender_id == receiver_id:
            raise InvalidRequestError("Cannot connect with yourself")

        if not await self.user_repo.exists(db, receiver_id):
            raise NotFoundError("User not found")

        existing = await self.connection_repo.find_between(db, sender_id, receiver_id)
        if existing:
            raise ConflictError("Connection already exists")

        try:
            connection = await self.connection_repo.create(
                db,
                {
                    "sender_id": sender_id,
                    "receiver_id": receiver_id,
                    "message": message or None,
                    "status": ConnectionStatus.PENDING,
                },
            )
        except IntegrityError:
            # A concurrent request for the same pair won the insert
            raise ConflictError("Connection already exists")

        logger.info(f"User {sender_id} requested connection {connection.id} with user {receiver_id}")
        return await self.connection_repo.get_with_users(db, connection.id)

    async def respond_to_connection(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        connection_id: UUID,
        decision: ConnectionDecision
    ) -> Connection:
        """
        Accept or reject a pending request. Only the receiver may respond.

        Args:
            db: Active database session
            acting_user_id: UUID of the caller
            connection_id: UUID of the connection
            decision: accept or reject

        Returns:
            Updated Connection with sender and receiver loaded

        Raises:
            NotFoundError: If the connection does not exist
            ForbiddenError: If the caller is not the receiver
            ConflictError: If the connection is not PENDING
        """
        decision = ConnectionDecision(decision)
        connection = await self.connection_repo.get(db, connection_id)
        if not connection:
            raise NotFoundError("Connection request not found")

        if connection.receiver_id != acting_user_id:
            raise ForbiddenError(f"Not authorized to {decision.value} this request")

        if connection.status != ConnectionStatus.PENDING:
            raise ConflictError("Connection request already processed")

        new_status = _DECISION_TO_STATUS[decision]
        if not await self.connection_repo.transition_from_pending(db, connection_id, new_status):
            raise ConflictError("Connection request already processed")

        logger.info(f"User {acting_user_id} set connection {connection_id} to {new_status.value}")
        return await self.connection_repo.get_with_users(db, connection_id)

    async def cancel_connection(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        connection_id: UUID
    ) -> None:
        """
        Withdraw a pending request. Only the sender may cancel.

        The record is deleted, so the pair returns to NONE and a new request
        becomes possible. Accepted or rejected connections cannot be cancelled.

        Raises:
            NotFoundError: If the connection does not exist
            ForbiddenError: If the caller is not the sender
            ConflictError: If the connection is not PENDING
        """
        connection = await self.connection_repo.get(db, connection_id)
        if not connection:
            raise NotFoundError("Connection request not found")

        if connection.sender_id != acting_user_id:
            raise ForbiddenError("Not authorized to cancel this request")

        if connection.status != ConnectionStatus.PENDING:
            raise ConflictError("Only pending connection requests can be cancelled")

        if not await self.connection_repo.delete_pending(db, connection_id):
            raise ConflictError("Only pending connection requests can be cancelled")

        logger.info(f"User {acting_user_id} cancelled connection request {connection_id}")

    async def get_status(
        self,
        db: AsyncSession,
        viewer_id: UUID,
        target_user_id: UUID
    ) -> dict:
        """
        Connection state between the viewer and another user.

        Returns:
            Dictionary with ``status`` (NONE, PENDING, ACCEPTED, REJECTED),
            ``is_sender`` (None when there is no record) and ``connection``

        Example:
            state = await service.get_status(db, me.id, other.id)
            if state["status"] == "PENDING" and not state["is_sender"]:
                show_accept_button()
        """
        connection = await self.connection_repo.find_between(db, viewer_id, target_user_id)
        if not connection:
            return {"status": NO_CONNECTION, "is_sender": None, "connection": None}

        return {
            "status": connection.status.value,
            "is_sender": connection.sender_id == viewer_id,
            "connection": connection,
        }

    async def is_connected(
        self,
        db: AsyncSession,
        user_a: UUID,
        user_b: UUID
    ) -> bool:
        """True iff the two users have an ACCEPTED connection. Gate for messaging and vouching."""
        return await self.connection_repo.is_connected(db, user_a, user_b)

    async def list_connections(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: Optional[ConnectionStatus] = None
    ) -> dict:
        """
        The user's connections grouped for display.

        Returns:
            Dictionary with ``sent`` (pending, user is sender), ``received``
            (pending, user is receiver), ``accepted`` and ``all``
        """
        connections = await self.connection_repo.list_for_user(db, user_id, status)
        return {
            "sent": [
                c for c in connections
                if c.sender_id == user_id and c.status == ConnectionStatus.PENDING
            ],
            "received": [
                c for c in connections
                if c.receiver_id == user_id and c.status == ConnectionStatus.PENDING
            ],
            "accepted": [c for c in connections if c.status == ConnectionStatus.ACCEPTED],
            "all": connections,
        }
