from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from designboard.core.auth import get_optional_user
from designboard.core.config import settings
from designboard.core.db import get_db
from designboard.core.schemas import ApiResponse
from designboard.domains.identity.entities import User
from designboard.domains.identity.schemas import SignInRequest, SessionUser, SessionResponse
from designboard.domains.identity.services import IdentityService

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/signin", response_model=ApiResponse[SessionResponse])
async def sign_in(
    login_data: SignInRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход по email и паролю, выдача cookie сессии"""
    identity_service = IdentityService(db)

    result = await identity_service.sign_in(login_data)

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user, token, expires_at = result
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )

    return ApiResponse(data=SessionResponse(
        user=SessionUser.model_validate(user),
        access_token=token,
        expires_at=expires_at
    ))


@router.get("/session", response_model=ApiResponse[SessionUser])
async def get_session(user: Optional[User] = Depends(get_optional_user)):
    """Текущая сессия; data = null, если пользователь не вошел"""
    if not user:
        return ApiResponse(data=None)
    return ApiResponse(data=SessionUser.model_validate(user))


@router.post("/signout", response_model=ApiResponse[None])
async def sign_out(response: Response):
    """Выход пользователя"""
    response.delete_cookie(key=settings.session_cookie_name)
    return ApiResponse(message="Successfully signed out")
