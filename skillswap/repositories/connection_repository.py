"""
Connection repository.

Pair lookups go through the canonical (user_low_id, user_high_id) columns,
so "a connection between A and B" is a single equality match regardless of
who sent the request. Status transitions and cancellation are conditional
writes guarded on PENDING so that two racing requests cannot both succeed.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, update, delete as sql_delete, and_, or_, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from skillswap.models.connection import Connection, ConnectionStatus, pair_key
from .base import BaseRepository

logger = logging.getLogger(__name__)


class ConnectionRepository(BaseRepository[Connection]):
    """
    Repository for Connection with pair-aware and state-guarded queries.

    Provides methods for:
    - Finding the record for an unordered pair
    - Loading a connection with sender/receiver profiles
    - Atomic PENDING -> ACCEPTED/REJECTED transitions
    - Atomic deletion of PENDING requests
    - Connected-check used by messaging and vouching
    """

    def __init__(self):
        super().__init__(Connection)

    @staticmethod
    def _pair_condition(user_a: UUID, user_b: UUID):
        low, high = pair_key(user_a, user_b)
        return and_(Connection.user_low_id == low, Connection.user_high_id == high)

    async def find_between(
        self,
        db: AsyncSession,
        user_a: UUID,
        user_b: UUID
    ) -> Optional[Connection]:
        """
        Get the connection record between two users, in either direction.

        Args:
            db: Active database session
            user_a: UUID of one user
            user_b: UUID of the other user

        Returns:
            The pair's connection (any status), or None
        """
        try:
            stmt = (
                select(Connection)
                .where(self._pair_condition(user_a, user_b))
                .options(selectinload(Connection.sender), selectinload(Connection.receiver))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching connection between {user_a} and {user_b}: {e}")
            raise

    async def get_with_users(
        self,
        db: AsyncSession,
        connection_id: UUID
    ) -> Optional[Connection]:
        """Get a connection by ID with sender and receiver loaded (fresh from the database)."""
        try:
            stmt = (
                select(Connection)
                .where(Connection.id == connection_id)
                .options(selectinload(Connection.sender), selectinload(Connection.receiver))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching connection {connection_id}: {e}")
            raise

    async def transition_from_pending(
        self,
        db: AsyncSession,
        connection_id: UUID,
        new_status: ConnectionStatus
    ) -> bool:
        """
        Move a connection out of PENDING in a single conditional UPDATE.

        Args:
            db: Active database session
            connection_id: UUID of the connection
            new_status: ACCEPTED or REJECTED

        Returns:
            True if the row was PENDING and is now ``new_status``; False if
            it no longer exists or was already processed.

        Example:
            if not await repo.transition_from_pending(db, conn.id, ConnectionStatus.ACCEPTED):
                raise ConflictError("Connection request already processed")
        """
        try:
            stmt = (
                update(Connection)
                .where(
                    and_(
                        Connection.id == connection_id,
                        Connection.status == ConnectionStatus.PENDING,
                    )
                )
                .values(status=new_status, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            await db.flush()
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(f"Error updating connection {connection_id} to {new_status}: {e}")
            await db.rollback()
            raise

    async def delete_pending(
        self,
        db: AsyncSession,
        connection_id: UUID
    ) -> bool:
        """
        Delete a connection only while it is still PENDING.

        Returns:
            True if a PENDING row was deleted, False otherwise
        """
        try:
            stmt = (
                sql_delete(Connection)
                .where(
                    and_(
                        Connection.id == connection_id,
                        Connection.status == ConnectionStatus.PENDING,
                    )
                )
                .execution_options(synchronize_session="fetch")
            )
            result = await db.execute(stmt)
            await db.flush()
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(f"Error deleting pending connection {connection_id}: {e}")
            await db.rollback()
            raise

    async def is_connected(
        self,
        db: AsyncSession,
        user_a: UUID,
        user_b: UUID
    ) -> bool:
        """True iff the pair has a connection record with status ACCEPTED."""
        try:
            stmt = (
                select(func.count(Connection.id))
                .where(
                    and_(
                        self._pair_condition(user_a, user_b),
                        Connection.status == ConnectionStatus.ACCEPTED,
                    )
                )
            )
            result = await db.execute(stmt)
            return (result.scalar() or 0) > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking connection between {user_a} and {user_b}: {e}")
            raise

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: Optional[ConnectionStatus] = None
    ) -> list[Connection]:
        """
        All connections the user sent or received, newest first.

        Args:
            db: Active database session
            user_id: UUID of the user
            status: Optional status filter

        Returns:
            Connections with sender and receiver loaded
        """
        try:
            stmt = (
                select(Connection)
                .where(or_(Connection.sender_id == user_id, Connection.receiver_id == user_id))
                .options(selectinload(Connection.sender), selectinload(Connection.receiver))
                .order_by(desc(Connection.created_at), Connection.id)
            )
            if status:
                stmt = stmt.where(Connection.status == status)
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing connections for user {user_id}: {e}")
            raise
