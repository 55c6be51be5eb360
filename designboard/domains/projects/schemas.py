from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import uuid

from designboard.core.schemas import CamelModel
from designboard.domains.canvas import is_valid_snapshot
from designboard.domains.projects.entities import ProjectMode


def _validate_project_name(v):
    # обрезка до проверки длины
    if not isinstance(v, str):
        return v
    if not v.strip():
        raise ValueError('Project name is required')
    return v.strip()


class ProjectSettings(CamelModel):
    """Настройки проекта"""
    default_mode: ProjectMode = ProjectMode.WEB


class ProjectSettingsUpdate(CamelModel):
    default_mode: Optional[ProjectMode] = None


class ProjectCreate(CamelModel):
    """Схема для создания проекта"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    settings: ProjectSettings = Field(default_factory=ProjectSettings)

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return _validate_project_name(v)


class ProjectUpdate(CamelModel):
    """Схема для обновления проекта"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    settings: Optional[ProjectSettingsUpdate] = None

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return _validate_project_name(v)


class ProjectResponse(CamelModel):
    """Схема для ответа с данными проекта"""
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: Optional[str] = None
    current_version: int
    thumbnail: Optional[str] = None
    settings: ProjectSettings
    created_at: datetime
    updated_at: datetime


class AICommandRecord(CamelModel):
    """Команда ассистента, примененная в версии"""
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    result: Optional[str] = None


class VersionCreate(CamelModel):
    """Схема для создания версии"""
    canvas_data: Dict[str, Any]
    changelog: Optional[str] = None
    ai_commands: List[AICommandRecord] = Field(default_factory=list)

    @field_validator('canvas_data')
    @classmethod
    def validate_canvas_data(cls, v):
        if not is_valid_snapshot(v):
            raise ValueError('Canvas data must be a valid editor snapshot with store and schema')
        return v


class VersionResponse(CamelModel):
    """Схема для ответа с данными версии"""
    id: uuid.UUID
    project_id: uuid.UUID
    version: int
    canvas_data: Dict[str, Any]
    changelog: Optional[str] = None
    ai_commands: List[AICommandRecord]
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class VersionListResponse(BaseModel):
    """Страница версий проекта"""
    success: bool = True
    data: List[VersionResponse]
    pagination: Pagination


class CanvasState(CamelModel):
    """Текущее состояние холста проекта"""
    canvas_data: Optional[Dict[str, Any]] = None
    version: Optional[VersionResponse] = None
