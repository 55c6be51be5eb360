from designboard.db.repositories.user_repository import UserRepository
from designboard.db.repositories.project_repository import ProjectRepository, VersionRepository

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "VersionRepository"
]
