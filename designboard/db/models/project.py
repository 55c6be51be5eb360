from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid, UniqueConstraint

from designboard.db.base import BaseModel, JSONType


class Project(BaseModel):
    __tablename__ = "projects"

    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    current_version = Column(Integer, nullable=False, default=1)
    thumbnail = Column(String(2048), nullable=True)
    settings = Column(JSONType, nullable=False, default=dict)


class Version(BaseModel):
    __tablename__ = "versions"
    __table_args__ = (
        UniqueConstraint("project_id", "version", name="uq_versions_project_version"),
    )

    project_id = Column(Uuid, ForeignKey("projects.id"), index=True, nullable=False)
    version = Column(Integer, nullable=False)
    canvas_data = Column(JSONType, nullable=False)
    changelog = Column(Text, nullable=True)
    ai_commands = Column(JSONType, nullable=False, default=list)
