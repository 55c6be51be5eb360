import logging
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from designboard.db.repositories.user_repository import UserRepository
from designboard.domains.identity.entities import User
from designboard.domains.identity.schemas import UserCreate, UserUpdate, SignInRequest
from designboard.core.security import create_access_token, verify_token

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для регистрации, входа и профиля пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("User already exists")

        user = User.create_user(
            email=user_data.email,
            name=user_data.name,
            password=user_data.password,
            image=user_data.image,
            preferences=user_data.preferences.model_dump(mode="json")
        )

        created = await self.user_repository.create(user)
        logger.info(f"User {created.id} registered")
        return created

    async def authenticate_user(self, login_data: SignInRequest) -> Optional[User]:
        """Проверка учетных данных (провайдер email + пароль)"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.authenticate(login_data.password):
            logger.warning(f"Failed sign-in attempt for {login_data.email}")
            return None

        return user

    async def sign_in(self, login_data: SignInRequest) -> Optional[Tuple[User, str, datetime]]:
        """Вход пользователя и выдача подписанного токена сессии"""
        user = await self.authenticate_user(login_data)

        if not user:
            return None

        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name
        }
        token, expires_at = create_access_token(data=token_data)
        logger.info(f"User {user.id} signed in")

        return user, token, expires_at

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Получение пользователя по id"""
        return await self.user_repository.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        return await self.user_repository.get_by_email(email)

    async def update_user_profile(self, user_id: uuid.UUID, update_data: UserUpdate) -> Optional[User]:
        """Обновление профиля пользователя"""
        user = await self.user_repository.get_by_id(user_id)

        if not user:
            return None

        preferences = None
        if update_data.preferences is not None:
            preferences = update_data.preferences.model_dump(mode="json", exclude_none=True)

        user.update_profile(
            name=update_data.name,
            image=update_data.image,
            preferences=preferences
        )

        return await self.user_repository.update(user)

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из токена сессии"""
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = uuid.UUID(payload["sub"])
        except (TypeError, ValueError):
            return None

        return await self.user_repository.get_by_id(user_id)
