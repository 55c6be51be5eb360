import logging
from typing import Optional, List, Dict, Any, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
import uuid

from designboard.db.base import utcnow
from designboard.db.models.project import Project as ProjectModel, Version as VersionModel

if TYPE_CHECKING:
    from designboard.domains.projects.entities import Project, Version

logger = logging.getLogger(__name__)


class ProjectRepository:
    """Репозиторий для работы с проектами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, project: "Project", initial_version: "Version") -> "Project":
        """Создание проекта вместе с первой версией в одной транзакции"""
        db_project = ProjectModel(
            id=project.id,
            user_id=project.user_id,
            name=project.name,
            description=project.description,
            current_version=initial_version.version,
            thumbnail=project.thumbnail,
            settings=project.settings
        )
        db_version = VersionModel(
            id=initial_version.id,
            project_id=project.id,
            version=initial_version.version,
            canvas_data=initial_version.canvas_data,
            changelog=initial_version.changelog,
            ai_commands=initial_version.ai_commands
        )

        self.session.add(db_project)
        try:
            # проект должен попасть в БД раньше версии из-за внешнего ключа
            await self.session.flush()
            self.session.add(db_version)
            await self.session.commit()
            await self.session.refresh(db_project)
            return self._to_domain(db_project)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid user_id")

    async def get_by_id(self, project_id: uuid.UUID) -> Optional["Project"]:
        """Получение проекта по id"""
        result = await self.session.execute(
            select(ProjectModel).where(ProjectModel.id == project_id)
        )
        db_project = result.scalar_one_or_none()
        return self._to_domain(db_project) if db_project else None

    async def get_by_owner(self, user_id: uuid.UUID) -> List["Project"]:
        """Получение всех проектов владельца, последние измененные первыми"""
        result = await self.session.execute(
            select(ProjectModel)
            .where(ProjectModel.user_id == user_id)
            .order_by(ProjectModel.updated_at.desc())
        )
        db_projects = result.scalars().all()
        return [self._to_domain(project) for project in db_projects]

    async def update(self, project: "Project") -> Optional["Project"]:
        """Обновление проекта (номер текущей версии здесь не меняется)"""
        stmt = (
            update(ProjectModel)
            .where(ProjectModel.id == project.id)
            .values(
                name=project.name,
                description=project.description,
                thumbnail=project.thumbnail,
                settings=project.settings,
                updated_at=project.updated_at
            )
            .execution_options(synchronize_session=False)
        )

        await self.session.execute(stmt)
        await self.session.commit()
        self.session.expire_all()

        return await self.get_by_id(project.id)

    async def delete(self, project_id: uuid.UUID) -> bool:
        """Удаление проекта вместе со всеми его версиями"""
        await self.session.execute(
            delete(VersionModel)
            .where(VersionModel.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(ProjectModel)
            .where(ProjectModel.id == project_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_project: ProjectModel) -> "Project":
        """Преобразование модели БД в доменную сущность"""
        from designboard.domains.projects.entities import Project

        return Project(
            id=db_project.id,
            user_id=db_project.user_id,
            name=db_project.name,
            description=db_project.description,
            current_version=db_project.current_version,
            thumbnail=db_project.thumbnail,
            settings=db_project.settings,
            created_at=db_project.created_at,
            updated_at=db_project.updated_at
        )


class VersionRepository:
    """Репозиторий для работы с версиями проектов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(
        self,
        project_id: uuid.UUID,
        canvas_data: Dict[str, Any],
        changelog: Optional[str] = None,
        ai_commands: Optional[List[Dict[str, Any]]] = None
    ) -> Optional["Version"]:
        """Добавление версии с атомарным выделением следующего номера.

        Номер берется из ``projects.current_version`` через
        UPDATE ... RETURNING в той же транзакции, что и вставка версии,
        поэтому указатель проекта и журнал версий не расходятся. Строка
        проекта остается заблокированной до commit, конкурентные записи
        выстраиваются в очередь. Возвращает None, если проекта нет.
        """
        now = utcnow()
        result = await self.session.execute(
            update(ProjectModel)
            .where(ProjectModel.id == project_id)
            .values(current_version=ProjectModel.current_version + 1, updated_at=now)
            .returning(ProjectModel.current_version)
            .execution_options(synchronize_session=False)
        )
        next_version = result.scalar_one_or_none()

        if next_version is None:
            await self.session.rollback()
            return None

        db_version = VersionModel(
            id=uuid.uuid4(),
            project_id=project_id,
            version=next_version,
            canvas_data=canvas_data,
            changelog=changelog,
            ai_commands=ai_commands or []
        )
        self.session.add(db_version)

        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Version number {next_version} already taken for project {project_id}")
            raise ValueError("Version conflict, please retry")

        self.session.expire_all()
        await self.session.refresh(db_version)
        return self._to_domain(db_version)

    async def get_by_project(
        self,
        project_id: uuid.UUID,
        limit: int = 10,
        offset: int = 0
    ) -> List["Version"]:
        """Получение версий проекта, новые первыми"""
        result = await self.session.execute(
            select(VersionModel)
            .where(VersionModel.project_id == project_id)
            .order_by(VersionModel.version.desc())
            .offset(offset)
            .limit(limit)
        )
        db_versions = result.scalars().all()
        return [self._to_domain(version) for version in db_versions]

    async def get_by_number(self, project_id: uuid.UUID, version: int) -> Optional["Version"]:
        """Получение версии по номеру"""
        result = await self.session.execute(
            select(VersionModel).where(
                VersionModel.project_id == project_id,
                VersionModel.version == version
            )
        )
        db_version = result.scalar_one_or_none()
        return self._to_domain(db_version) if db_version else None

    async def count_by_project(self, project_id: uuid.UUID) -> int:
        """Подсчет количества версий проекта"""
        result = await self.session.execute(
            select(func.count(VersionModel.id)).where(VersionModel.project_id == project_id)
        )
        return result.scalar()

    def _to_domain(self, db_version: VersionModel) -> "Version":
        """Преобразование модели БД в доменную сущность"""
        from designboard.domains.projects.entities import Version

        return Version(
            id=db_version.id,
            project_id=db_version.project_id,
            version=db_version.version,
            canvas_data=db_version.canvas_data,
            changelog=db_version.changelog,
            ai_commands=db_version.ai_commands,
            created_at=db_version.created_at,
            updated_at=db_version.updated_at
        )
