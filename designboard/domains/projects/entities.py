import enum
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from designboard.domains.canvas import initial_snapshot


class ProjectMode(str, enum.Enum):
    WEB = "web"
    MOBILE = "mobile"
    DATABASE = "database"
    ARCHITECTURE = "architecture"


DEFAULT_SETTINGS: Dict[str, Any] = {"default_mode": ProjectMode.WEB.value}


class Project:
    """Сущность проекта"""

    def __init__(
        self,
        id: uuid.UUID,
        user_id: uuid.UUID,
        name: str,
        description: Optional[str] = None,
        current_version: int = 1,
        thumbnail: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.description = description
        self.current_version = current_version
        self.thumbnail = thumbnail
        self.settings = {**DEFAULT_SETTINGS, **(settings or {})}
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def apply_update(self, changes: Dict[str, Any]) -> None:
        """Частичное обновление полей проекта"""
        settings = changes.get("settings")
        for field in ("name", "description", "thumbnail"):
            if field in changes:
                setattr(self, field, changes[field])
        if settings:
            self.settings = {**self.settings, **settings}
        self.updated_at = datetime.now(timezone.utc)

    def initial_version(self) -> "Version":
        """Первая версия с пустым холстом"""
        return Version.create_version(
            project_id=self.id,
            version=1,
            canvas_data=initial_snapshot(),
            changelog="Initial version"
        )

    @classmethod
    def create_project(
        cls,
        user_id: uuid.UUID,
        name: str,
        description: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None
    ) -> "Project":
        """Создание нового проекта"""
        return cls(
            id=uuid.uuid4(),
            user_id=user_id,
            name=name,
            description=description,
            current_version=1,
            settings=settings
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Project):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Project(id={self.id}, name={self.name}, current_version={self.current_version})"


class Version:
    """Сущность версии проекта. Версии только добавляются, но не изменяются"""

    def __init__(
        self,
        id: uuid.UUID,
        project_id: uuid.UUID,
        version: int,
        canvas_data: Dict[str, Any],
        changelog: Optional[str] = None,
        ai_commands: Optional[List[Dict[str, Any]]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.project_id = project_id
        self.version = version
        self.canvas_data = canvas_data
        self.changelog = changelog
        self.ai_commands = ai_commands or []
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @classmethod
    def create_version(
        cls,
        project_id: uuid.UUID,
        version: int,
        canvas_data: Dict[str, Any],
        changelog: Optional[str] = None,
        ai_commands: Optional[List[Dict[str, Any]]] = None
    ) -> "Version":
        """Создание новой версии"""
        return cls(
            id=uuid.uuid4(),
            project_id=project_id,
            version=version,
            canvas_data=canvas_data,
            changelog=changelog,
            ai_commands=ai_commands
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Version(id={self.id}, project_id={self.project_id}, version={self.version})"


class ProjectAccess:
    """Проверка прав на проект: доступ есть только у владельца"""

    def __init__(self, project_id: uuid.UUID, owner_id: uuid.UUID):
        self.project_id = project_id
        self.owner_id = owner_id

    def is_owner(self, user_id: uuid.UUID) -> bool:
        return user_id == self.owner_id

    def can_view(self, user_id: uuid.UUID) -> bool:
        return self.is_owner(user_id)

    def can_edit(self, user_id: uuid.UUID) -> bool:
        return self.is_owner(user_id)
