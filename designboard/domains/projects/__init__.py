from designboard.domains.projects.entities import ProjectMode, Project, Version, ProjectAccess
from designboard.domains.projects.schemas import (
    ProjectSettings, ProjectSettingsUpdate, ProjectCreate, ProjectUpdate, ProjectResponse,
    AICommandRecord, VersionCreate, VersionResponse, Pagination, VersionListResponse,
    CanvasState
)
from designboard.domains.projects.services import ProjectService, VersionService

__all__ = [
    "ProjectMode", "Project", "Version", "ProjectAccess",
    "ProjectSettings", "ProjectSettingsUpdate", "ProjectCreate", "ProjectUpdate",
    "ProjectResponse", "AICommandRecord", "VersionCreate", "VersionResponse",
    "Pagination", "VersionListResponse", "CanvasState",
    "ProjectService", "VersionService"
]
