from typing import List
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from designboard.core.auth import get_current_user
from designboard.core.db import get_db
from designboard.core.schemas import ApiResponse
from designboard.domains.identity.entities import User
from designboard.domains.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, CanvasState, VersionResponse
)
from designboard.domains.projects.services import ProjectService, VersionService

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Project not found"
    )


def _forbidden(e: PermissionError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=str(e)
    )


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def get_user_projects(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка проектов текущего пользователя"""
    project_service = ProjectService(db)

    projects = await project_service.get_user_projects(current_user.id)

    return ApiResponse(data=[ProjectResponse.model_validate(project) for project in projects])


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового проекта"""
    project_service = ProjectService(db)

    project = await project_service.create_project(project_data, current_user.id)

    return ApiResponse(data=ProjectResponse.model_validate(project))


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def get_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение проекта по id"""
    project_service = ProjectService(db)

    try:
        project = await project_service.get_project(project_id, current_user.id)
    except PermissionError as e:
        raise _forbidden(e)

    if not project:
        raise _not_found()

    return ApiResponse(data=ProjectResponse.model_validate(project))


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: uuid.UUID,
    update_data: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление проекта"""
    project_service = ProjectService(db)

    try:
        project = await project_service.update_project(project_id, update_data, current_user.id)
    except PermissionError as e:
        raise _forbidden(e)

    if not project:
        raise _not_found()

    return ApiResponse(data=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление проекта вместе с версиями"""
    project_service = ProjectService(db)

    try:
        success = await project_service.delete_project(project_id, current_user.id)
    except PermissionError as e:
        raise _forbidden(e)

    if not success:
        raise _not_found()

    return ApiResponse(message="Project deleted successfully")


@router.get("/{project_id}/canvas", response_model=ApiResponse[CanvasState])
async def get_project_canvas(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Холст текущей версии проекта"""
    version_service = VersionService(db)

    try:
        result = await version_service.get_canvas(project_id, current_user.id)
    except PermissionError as e:
        raise _forbidden(e)

    if result is None:
        raise _not_found()

    canvas_data, version = result
    return ApiResponse(data=CanvasState(
        canvas_data=canvas_data,
        version=VersionResponse.model_validate(version) if version else None
    ))
