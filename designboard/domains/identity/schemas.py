from pydantic import AnyHttpUrl, EmailStr, Field, TypeAdapter, ValidationError, field_validator
from typing import Optional
from datetime import datetime
import uuid

from designboard.core.schemas import CamelModel
from designboard.domains.projects.entities import ProjectMode


class UserPreferences(CamelModel):
    """Настройки пользователя"""
    default_mode: ProjectMode = ProjectMode.WEB
    microphone_enabled: bool = True
    auto_save: bool = True


class UserPreferencesUpdate(CamelModel):
    """Частичное обновление настроек"""
    default_mode: Optional[ProjectMode] = None
    microphone_enabled: Optional[bool] = None
    auto_save: Optional[bool] = None


_http_url = TypeAdapter(AnyHttpUrl)


def _validate_name(v):
    if not isinstance(v, str):
        return v
    if not v.strip():
        raise ValueError('Name is required')
    return v.strip()


def _validate_image(v):
    # URL проверяется, но сохраняется в том виде, в каком его прислали
    if v is None:
        return v
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError('Image must be a valid http(s) URL')
    return v


class UserCreate(CamelModel):
    """Схема для регистрации пользователя"""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    image: Optional[str] = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return _validate_name(v)

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return _validate_image(v)


class UserUpdate(CamelModel):
    """Схема для обновления профиля"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    preferences: Optional[UserPreferencesUpdate] = None

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return _validate_name(v)

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return _validate_image(v)


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя (без хеша пароля)"""
    id: uuid.UUID
    email: EmailStr
    name: str
    image: Optional[str] = None
    preferences: UserPreferences
    created_at: datetime
    updated_at: datetime


class SignInRequest(CamelModel):
    """Учетные данные для входа"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionUser(CamelModel):
    """Пользователь текущей сессии"""
    id: uuid.UUID
    email: str
    name: str
    image: Optional[str] = None


class SessionResponse(CamelModel):
    """Выданная сессия"""
    user: SessionUser
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
