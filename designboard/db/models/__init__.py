from designboard.db.models.user import User
from designboard.db.models.project import Project, Version

__all__ = [
    "User",
    "Project",
    "Version",
]
