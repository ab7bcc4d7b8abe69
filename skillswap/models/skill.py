from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Enum, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from skillswap.core.database import Base


class SkillDirection(str, enum.Enum):
    OFFERED = "OFFERED"
    WANTED = "WANTED"


class Proficiency(str, enum.Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class Category(Base):
    __tablename__ = "categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text)
    icon = Column(String(20))

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Category(name={self.name})>"


class Skill(Base):
    __tablename__ = "skills"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category_id = Column(UUID(as_uuid=True), ForeignKey("categories.id"), nullable=True, index=True)
    description = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Skill(name={self.name})>"


class UserSkill(Base):
    """One user's OFFERED or WANTED relationship to a skill (a skill ledger entry)."""

    __tablename__ = "user_skills"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(UUID(as_uuid=True), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    direction = Column(Enum(SkillDirection), nullable=False, index=True)
    proficiency = Column(Enum(Proficiency), nullable=True)  # OFFERED entries only
    note = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="user_skills")
    skill = relationship("Skill", lazy="joined")

    # A user cannot add the same skill twice in the same direction
    __table_args__ = (
        UniqueConstraint('user_id', 'skill_id', 'direction', name='unique_user_skill_direction'),
    )

    def __repr__(self):
        return f"<UserSkill(user_id={self.user_id}, skill_id={self.skill_id}, direction={self.direction})>"
