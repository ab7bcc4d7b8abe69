from sqlalchemy import Column, DateTime, ForeignKey, Text, Enum, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from skillswap.core.database import Base


class ConnectionStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


def pair_key(user_a: uuid.UUID, user_b: uuid.UUID) -> tuple[uuid.UUID, uuid.UUID]:
    """Canonical (low, high) ordering of an unordered user pair."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


class Connection(Base):
    __tablename__ = "connections"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    sender_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Unordered pair in canonical order; backs the one-record-per-pair constraint
    user_low_id = Column(UUID(as_uuid=True), nullable=False)
    user_high_id = Column(UUID(as_uuid=True), nullable=False)

    status = Column(Enum(ConnectionStatus), nullable=False, default=ConnectionStatus.PENDING, index=True)
    message = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

    __table_args__ = (
        UniqueConstraint('user_low_id', 'user_high_id', name='unique_connection_pair'),
        CheckConstraint('sender_id <> receiver_id', name='ck_connection_not_self'),
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.sender_id is not None and self.receiver_id is not None:
            self.user_low_id, self.user_high_id = pair_key(self.sender_id, self.receiver_id)

    def __repr__(self):
        return f"<Connection(sender_id={self.sender_id}, receiver_id={self.receiver_id}, status={self.status})>"
