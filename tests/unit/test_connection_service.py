"""
Unit tests for ConnectionService.

All database I/O is replaced with AsyncMock objects so tests run without a
real database. Race outcomes (a conditional write affecting no rows, or an
insert losing to a concurrent one) are simulated through the mocks.
"""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from skillswap.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from skillswap.models.connection import Connection, ConnectionStatus
from skillswap.schemas.connection import ConnectionDecision
from skillswap.services.connection_service import ConnectionService


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
def _make_connection(
    sender_id: uuid.UUID | None = None,
    receiver_id: uuid.UUID | None = None,
    status: ConnectionStatus = ConnectionStatus.PENDING,
) -> Connection:
    connection = Connection(
        sender_id=sender_id or uuid.uuid4(),
        receiver_id=receiver_id or uuid.uuid4(),
    )
    connection.id = uuid.uuid4()
    connection.status = status
    return connection


def _make_service(
    connection: Connection | None = None,
    receiver_exists: bool = True,
    existing_between: Connection | None = None,
    transition_ok: bool = True,
    delete_ok: bool = True,
) -> tuple[ConnectionService, MagicMock]:
    connection_repo = MagicMock()
    connection_repo.get = AsyncMock(return_value=connection)
    connection_repo.get_with_users = AsyncMock(return_value=connection)
    connection_repo.find_between = AsyncMock(return_value=existing_between)
    connection_repo.create = AsyncMock(return_value=connection or _make_connection())
    connection_repo.transition_from_pending = AsyncMock(return_value=transition_ok)
    connection_repo.delete_pending = AsyncMock(return_value=delete_ok)
    connection_repo.is_connected = AsyncMock(return_value=False)
    connection_repo.list_for_user = AsyncMock(return_value=[])

    user_repo = MagicMock()
    user_repo.exists = AsyncMock(return_value=receiver_exists)

    return ConnectionService(connection_repo=connection_repo, user_repo=user_repo), connection_repo


# ---------------------------------------------------------------------------
# request_connection
# ---------------------------------------------------------------------------
class TestRequestConnection:
    @pytest.mark.asyncio
    async def test_self_request_rejected(self):
        me = uuid.uuid4()
        service, repo = _make_service()

        with pytest.raises(InvalidRequestError):
            await service.request_connection(AsyncMock(), me, me)
        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_receiver(self):
        service, repo = _make_service(receiver_exists=False)

        with pytest.raises(NotFoundError):
            await service.request_connection(AsyncMock(), uuid.uuid4(), uuid.uuid4())
        repo.create.assert_not_awaited()

    @pytest.mark.parametrize(
        "status",
        [ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED, ConnectionStatus.REJECTED],
    )
    @pytest.mark.asyncio
    async def test_any_existing_record_blocks(self, status):
        service, repo = _make_service(existing_between=_make_connection(status=status))

        with pytest.raises(ConflictError):
            await service.request_connection(AsyncMock(), uuid.uuid4(), uuid.uuid4())
        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_insert_becomes_conflict(self):
        service, repo = _make_service()
        repo.create = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate")))

        with pytest.raises(ConflictError):
            await service.request_connection(AsyncMock(), uuid.uuid4(), uuid.uuid4())

    @pytest.mark.asyncio
    async def test_creates_pending_record(self):
        sender, receiver = uuid.uuid4(), uuid.uuid4()
        created = _make_connection(sender, receiver)
        service, repo = _make_service(connection=created)

        result = await service.request_connection(AsyncMock(), sender, receiver, "Hi!")

        assert result is created
        payload = repo.create.await_args.args[1]
        assert payload["sender_id"] == sender
        assert payload["receiver_id"] == receiver
        assert payload["status"] == ConnectionStatus.PENDING
        assert payload["message"] == "Hi!"


# ---------------------------------------------------------------------------
# respond_to_connection
# ---------------------------------------------------------------------------
class TestRespondToConnection:
    @pytest.mark.asyncio
    async def test_not_found(self):
        service, _ = _make_service(connection=None)
        with pytest.raises(NotFoundError):
            await service.respond_to_connection(
                AsyncMock(), uuid.uuid4(), uuid.uuid4(), ConnectionDecision.ACCEPT
            )

    @pytest.mark.asyncio
    async def test_sender_cannot_accept_own_request(self):
        connection = _make_connection()
        service, repo = _make_service(connection=connection)

        with pytest.raises(ForbiddenError):
            await service.respond_to_connection(
                AsyncMock(), connection.sender_id, connection.id, ConnectionDecision.ACCEPT
            )
        repo.transition_from_pending.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_third_party_cannot_reject(self):
        connection = _make_connection()
        service, _ = _make_service(connection=connection)

        with pytest.raises(ForbiddenError):
            await service.respond_to_connection(
                AsyncMock(), uuid.uuid4(), connection.id, ConnectionDecision.REJECT
            )

    @pytest.mark.parametrize("status", [ConnectionStatus.ACCEPTED, ConnectionStatus.REJECTED])
    @pytest.mark.asyncio
    async def test_already_processed(self, status):
        connection = _make_connection(status=status)
        service, repo = _make_service(connection=connection)

        with pytest.raises(ConflictError):
            await service.respond_to_connection(
                AsyncMock(), connection.receiver_id, connection.id, ConnectionDecision.ACCEPT
            )
        repo.transition_from_pending.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_race_is_conflict(self):
        connection = _make_connection()
        service, _ = _make_service(connection=connection, transition_ok=False)

        with pytest.raises(ConflictError):
            await service.respond_to_connection(
                AsyncMock(), connection.receiver_id, connection.id, ConnectionDecision.ACCEPT
            )

    @pytest.mark.parametrize(
        "decision,expected",
        [
            (ConnectionDecision.ACCEPT, ConnectionStatus.ACCEPTED),
            (ConnectionDecision.REJECT, ConnectionStatus.REJECTED),
        ],
    )
    @pytest.mark.asyncio
    async def test_receiver_transitions(self, decision, expected):
        connection = _make_connection()
        service, repo = _make_service(connection=connection)
        db = AsyncMock()

        await service.respond_to_connection(db, connection.receiver_id, connection.id, decision)

        repo.transition_from_pending.assert_awaited_once_with(db, connection.id, expected)


# ---------------------------------------------------------------------------
# cancel_connection
# ---------------------------------------------------------------------------
class TestCancelConnection:
    @pytest.mark.asyncio
    async def test_receiver_cannot_cancel(self):
        connection = _make_connection()
        service, repo = _make_service(connection=connection)

        with pytest.raises(ForbiddenError):
            await service.cancel_connection(AsyncMock(), connection.receiver_id, connection.id)
        repo.delete_pending.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_accepted_cannot_be_cancelled(self):
        connection = _make_connection(status=ConnectionStatus.ACCEPTED)
        service, repo = _make_service(connection=connection)

        with pytest.raises(ConflictError):
            await service.cancel_connection(AsyncMock(), connection.sender_id, connection.id)
        repo.delete_pending.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_race_is_conflict(self):
        connection = _make_connection()
        service, _ = _make_service(connection=connection, delete_ok=False)

        with pytest.raises(ConflictError):
            await service.cancel_connection(AsyncMock(), connection.sender_id, connection.id)

    @pytest.mark.asyncio
    async def test_sender_cancels_pending(self):
        connection = _make_connection()
        service, repo = _make_service(connection=connection)
        db = AsyncMock()

        await service.cancel_connection(db, connection.sender_id, connection.id)

        repo.delete_pending.assert_awaited_once_with(db, connection.id)

    @pytest.mark.asyncio
    async def test_not_found(self):
        service, _ = _make_service(connection=None)
        with pytest.raises(NotFoundError):
            await service.cancel_connection(AsyncMock(), uuid.uuid4(), uuid.uuid4())


# ---------------------------------------------------------------------------
# get_status / list_connections
# ---------------------------------------------------------------------------
class TestGetStatus:
    @pytest.mark.asyncio
    async def test_none(self):
        service, _ = _make_service()
        state = await service.get_status(AsyncMock(), uuid.uuid4(), uuid.uuid4())
        assert state == {"status": "NONE", "is_sender": None, "connection": None}

    @pytest.mark.asyncio
    async def test_pending_seen_from_both_sides(self):
        connection = _make_connection()
        service, _ = _make_service(existing_between=connection)

        as_sender = await service.get_status(AsyncMock(), connection.sender_id, connection.receiver_id)
        as_receiver = await service.get_status(AsyncMock(), connection.receiver_id, connection.sender_id)

        assert as_sender["status"] == as_receiver["status"] == "PENDING"
        assert as_sender["is_sender"] is True
        assert as_receiver["is_sender"] is False


@pytest.mark.asyncio
async def test_list_connections_groups_by_role_and_status():
    me = uuid.uuid4()
    sent = _make_connection(sender_id=me)
    received = _make_connection(receiver_id=me)
    accepted = _make_connection(sender_id=me, status=ConnectionStatus.ACCEPTED)
    rejected = _make_connection(receiver_id=me, status=ConnectionStatus.REJECTED)
    service, repo = _make_service()
    repo.list_for_user = AsyncMock(return_value=[sent, received, accepted, rejected])

    groups = await service.list_connections(AsyncMock(), me)

    assert groups["sent"] == [sent]
    assert groups["received"] == [received]
    assert groups["accepted"] == [accepted]
    assert groups["all"] == [sent, received, accepted, rejected]
