from sqlalchemy import Column, String, DateTime, Text, Enum
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from skillswap.core.database import Base


class ExchangePreference(str, enum.Enum):
    TEACHING_ONLY = "TEACHING_ONLY"
    LEARNING_ONLY = "LEARNING_ONLY"
    FLEXIBLE = "FLEXIBLE"


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Profile information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    username = Column(String(50), unique=True, index=True)  # Public handle
    bio = Column(Text)
    location = Column(String(255), index=True)
    profile_image = Column(String(500))
    exchange_preference = Column(
        Enum(ExchangePreference), nullable=False, default=ExchangePreference.FLEXIBLE
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user_skills = relationship(
        "UserSkill", back_populates="user", cascade="all, delete-orphan"
    )
    received_vouches = relationship(
        "Vouch", foreign_keys="Vouch.vouched_id", back_populates="vouched"
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
