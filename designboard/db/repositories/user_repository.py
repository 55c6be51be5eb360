from typing import Optional, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
import uuid

from designboard.db.models.user import User as UserModel

if TYPE_CHECKING:
    from designboard.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: "User") -> "User":
        """Создание нового пользователя"""
        db_user = UserModel(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            image=user.image,
            preferences=user.preferences
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User already exists")

    async def get_by_id(self, user_id: uuid.UUID) -> Optional["User"]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional["User"]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email.lower())
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update(self, user: "User") -> Optional["User"]:
        """Обновление пользователя"""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                name=user.name,
                image=user.image,
                preferences=user.preferences,
                password_hash=user.password_hash,
                updated_at=user.updated_at
            )
            .execution_options(synchronize_session=False)
        )

        await self.session.execute(stmt)
        await self.session.commit()
        # объекты в сессии не истекают при commit, перечитываем из БД
        self.session.expire_all()

        return await self.get_by_id(user.id)

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email.lower())
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> "User":
        """Преобразование модели БД в доменную сущность"""
        from designboard.domains.identity.entities import User

        return User(
            id=db_user.id,
            email=db_user.email,
            name=db_user.name,
            password_hash=db_user.password_hash,
            image=db_user.image,
            preferences=db_user.preferences,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
