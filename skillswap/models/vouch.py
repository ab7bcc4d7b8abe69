from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from skillswap.core.database import Base


class Vouch(Base):
    __tablename__ = "vouches"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    voucher_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vouched_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(UUID(as_uuid=True), ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    comment = Column(Text)
    rating = Column(Integer, nullable=False, default=5)  # 1-5

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    voucher = relationship("User", foreign_keys=[voucher_id])
    vouched = relationship("User", foreign_keys=[vouched_id], back_populates="received_vouches")

    # One vouch per direction between two users
    __table_args__ = (
        UniqueConstraint('voucher_id', 'vouched_id', name='unique_voucher_vouched'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='ck_vouch_rating_range'),
    )

    def __repr__(self):
        return f"<Vouch(voucher_id={self.voucher_id}, vouched_id={self.vouched_id}, rating={self.rating})>"
