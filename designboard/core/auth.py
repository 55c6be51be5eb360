from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from designboard.core.config import settings
from designboard.core.db import get_db
from designboard.domains.identity.entities import User
from designboard.domains.identity.services import IdentityService

# auto_error=False: токен может прийти и в cookie сессии
bearer_scheme = HTTPBearer(auto_error=False)


def _session_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Токен из заголовка Authorization, иначе из cookie сессии"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Текущий пользователь или None, если сессии нет"""
    token = _session_token(request, credentials)
    if not token:
        return None

    identity_service = IdentityService(db)
    return await identity_service.get_current_user_from_token(token)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Зависимость для получения текущего пользователя"""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
