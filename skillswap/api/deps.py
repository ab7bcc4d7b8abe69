from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.core.database import get_db
from skillswap.core.security import verify_token
from skillswap.models.user import User
from skillswap.repositories.user_repository import UserRepository
from skillswap.services.connection_service import ConnectionService
from skillswap.services.match_service import MatchService
from skillswap.services.message_service import MessageService
from skillswap.services.skill_service import SkillService
from skillswap.services.vouch_service import VouchService
import uuid

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the bearer token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = verify_token(credentials.credentials, "access")
    if user_id is None:
        raise credentials_exception

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise credentials_exception

    user = await UserRepository().get(db, user_uuid)
    if user is None:
        raise credentials_exception

    return user


# Service providers; tests swap these through app.dependency_overrides

def get_match_service() -> MatchService:
    return MatchService()


def get_connection_service() -> ConnectionService:
    return ConnectionService()


def get_skill_service() -> SkillService:
    return SkillService()


def get_vouch_service() -> VouchService:
    return VouchService()


def get_message_service() -> MessageService:
    return MessageService()
