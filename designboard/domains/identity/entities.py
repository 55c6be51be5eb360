import uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from designboard.core.security import get_password_hash, verify_password

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "default_mode": "web",
    "microphone_enabled": True,
    "auto_save": True,
}


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: uuid.UUID,
        email: str,
        name: str,
        password_hash: Optional[str] = None,
        image: Optional[str] = None,
        preferences: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.name = name
        self.password_hash = password_hash
        self.image = image
        self.preferences = {**DEFAULT_PREFERENCES, **(preferences or {})}
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        if not self.password_hash:
            return False
        return verify_password(password, self.password_hash)

    def update_profile(
        self,
        name: Optional[str] = None,
        image: Optional[str] = None,
        preferences: Optional[Dict[str, Any]] = None
    ) -> None:
        """Обновление профиля; настройки сливаются с текущими"""
        if name:
            self.name = name
        if image is not None:
            self.image = image
        if preferences:
            self.preferences = {**self.preferences, **preferences}
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_user(
        cls,
        email: str,
        name: str,
        password: str,
        image: Optional[str] = None,
        preferences: Optional[Dict[str, Any]] = None
    ) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            email=email.lower(),
            name=name,
            password_hash=get_password_hash(password),
            image=image,
            preferences=preferences
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, name={self.name})"
