import logging
import math
from typing import Optional, List, Tuple, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from designboard.db.repositories.project_repository import ProjectRepository, VersionRepository
from designboard.domains.canvas import validate_and_fix_snapshot
from designboard.domains.projects.entities import Project, Version, ProjectAccess
from designboard.domains.projects.schemas import ProjectCreate, ProjectUpdate, VersionCreate

logger = logging.getLogger(__name__)


class ProjectService:
    """Сервис для работы с проектами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repository = ProjectRepository(session)

    async def _get_owned(self, project_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Project]:
        """Проект по id с проверкой владельца; PermissionError для чужого проекта"""
        project = await self.project_repository.get_by_id(project_id)

        if not project:
            return None

        access = ProjectAccess(project.id, project.user_id)
        if not access.can_edit(user_id):
            raise PermissionError("Access denied")

        return project

    async def create_project(self, project_data: ProjectCreate, user_id: uuid.UUID) -> Project:
        """Создание проекта с первой версией"""
        project = Project.create_project(
            user_id=user_id,
            name=project_data.name,
            description=project_data.description,
            settings=project_data.settings.model_dump(mode="json")
        )

        created = await self.project_repository.create(project, project.initial_version())
        logger.info(f"Project {created.id} created by user {user_id}")
        return created

    async def get_user_projects(self, user_id: uuid.UUID) -> List[Project]:
        """Получение проектов пользователя"""
        return await self.project_repository.get_by_owner(user_id)

    async def get_project(self, project_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Project]:
        """Получение проекта владельцем"""
        return await self._get_owned(project_id, user_id)

    async def update_project(
        self,
        project_id: uuid.UUID,
        update_data: ProjectUpdate,
        user_id: uuid.UUID
    ) -> Optional[Project]:
        """Обновление проекта"""
        project = await self._get_owned(project_id, user_id)

        if not project:
            return None

        project.apply_update(update_data.model_dump(mode="json", exclude_unset=True, exclude_none=True))
        return await self.project_repository.update(project)

    async def delete_project(self, project_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Удаление проекта и всех его версий (только владелец)"""
        project = await self._get_owned(project_id, user_id)

        if not project:
            return False

        deleted = await self.project_repository.delete(project_id)
        logger.info(f"Project {project_id} deleted by user {user_id}")
        return deleted


class VersionService:
    """Сервис для работы с версиями проектов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_service = ProjectService(session)
        self.version_repository = VersionRepository(session)

    async def get_project_versions(
        self,
        project_id: uuid.UUID,
        user_id: uuid.UUID,
        page: int = 1,
        limit: int = 10
    ) -> Optional[Tuple[List[Version], Dict[str, int]]]:
        """Страница версий проекта и данные пагинации"""
        project = await self.project_service.get_project(project_id, user_id)

        if not project:
            return None

        offset = (page - 1) * limit
        versions = await self.version_repository.get_by_project(project_id, limit, offset)
        total = await self.version_repository.count_by_project(project_id)

        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit)
        }
        return versions, pagination

    async def create_version(
        self,
        project_id: uuid.UUID,
        version_data: VersionCreate,
        user_id: uuid.UUID
    ) -> Optional[Version]:
        """Добавление новой версии проекта"""
        project = await self.project_service.get_project(project_id, user_id)

        if not project:
            return None

        payload = version_data.model_dump(mode="json")
        version = await self.version_repository.append(
            project_id,
            canvas_data=payload["canvas_data"],
            changelog=payload["changelog"],
            ai_commands=payload["ai_commands"]
        )
        if version:
            logger.info(f"Project {project_id} advanced to version {version.version}")
        return version

    async def get_version(
        self,
        project_id: uuid.UUID,
        version_number: int,
        user_id: uuid.UUID
    ) -> Optional[Version]:
        """Получение конкретной версии проекта"""
        project = await self.project_service.get_project(project_id, user_id)

        if not project:
            return None

        return await self.version_repository.get_by_number(project_id, version_number)

    async def restore_version(
        self,
        project_id: uuid.UUID,
        version_number: int,
        user_id: uuid.UUID
    ) -> Optional[Version]:
        """Восстановление: новая версия с холстом из указанной"""
        source = await self.get_version(project_id, version_number, user_id)

        if not source:
            return None

        version = await self.version_repository.append(
            project_id,
            canvas_data=source.canvas_data,
            changelog=f"Restored from version {version_number}"
        )
        if version:
            logger.info(f"Project {project_id} restored from version {version_number} as {version.version}")
        return version

    async def get_canvas(
        self,
        project_id: uuid.UUID,
        user_id: uuid.UUID
    ) -> Optional[Tuple[Optional[Dict[str, Any]], Optional[Version]]]:
        """Холст текущей версии проекта, подготовленный для редактора"""
        project = await self.project_service.get_project(project_id, user_id)

        if not project:
            return None

        current = await self.version_repository.get_by_number(project_id, project.current_version)

        if not current:
            return None, None

        return validate_and_fix_snapshot(current.canvas_data), current
