from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid
from skillswap.models.skill import SkillDirection, Proficiency


class Category(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class Skill(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    category: Optional[Category] = None

    class Config:
        from_attributes = True


class SkillCreate(BaseModel):
    name: str = Field(..., max_length=100)
    category: Optional[str] = Field(None, description="Category name; created if missing")
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Skill name cannot be empty')
        return v.strip()


class UserSkill(BaseModel):
    """A skill ledger entry"""
    id: uuid.UUID
    user_id: uuid.UUID
    skill_id: uuid.UUID
    direction: SkillDirection
    proficiency: Optional[Proficiency] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    skill: Optional[Skill] = None

    class Config:
        from_attributes = True


class UserSkillCreate(BaseModel):
    """Add a skill to the caller's ledger, by id or by name"""
    skill_id: Optional[uuid.UUID] = None
    skill_name: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = None  # Used only when creating a skill by name
    direction: SkillDirection
    proficiency: Optional[Proficiency] = None
    note: Optional[str] = None


class UserSkillUpdate(BaseModel):
    proficiency: Optional[Proficiency] = None
    note: Optional[str] = None


class SkillResponse(BaseModel):
    skill: Skill


class SkillListResponse(BaseModel):
    skills: List[Skill]


class CategoryListResponse(BaseModel):
    categories: List[Category]


class UserSkillResponse(BaseModel):
    user_skill: UserSkill


class UserSkillsResponse(BaseModel):
    skills_offered: List[UserSkill]
    skills_wanted: List[UserSkill]


class DeleteResponse(BaseModel):
    message: str
