import uuid

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from designboard.core.auth import get_current_user
from designboard.core.db import get_db
from designboard.core.schemas import ApiResponse
from designboard.domains.identity.entities import User
from designboard.domains.projects.schemas import (
    VersionCreate, VersionResponse, VersionListResponse, Pagination
)
from designboard.domains.projects.services import VersionService

router = APIRouter(prefix="/api/projects/{project_id}/versions", tags=["versions"])


@router.get("", response_model=VersionListResponse)
async def get_project_versions(
    project_id: uuid.UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение версий проекта, новые первыми"""
    version_service = VersionService(db)

    try:
        result = await version_service.get_project_versions(project_id, current_user.id, page, limit)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    versions, pagination = result
    return VersionListResponse(
        data=[VersionResponse.model_validate(version) for version in versions],
        pagination=Pagination(**pagination)
    )


@router.post("", response_model=ApiResponse[VersionResponse], status_code=status.HTTP_201_CREATED)
async def create_version(
    project_id: uuid.UUID,
    version_data: VersionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Сохранение новой версии холста"""
    version_service = VersionService(db)

    try:
        version = await version_service.create_version(project_id, version_data, current_user.id)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not version:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    return ApiResponse(data=VersionResponse.model_validate(version))


@router.get("/{version_number}", response_model=ApiResponse[VersionResponse])
async def get_version(
    project_id: uuid.UUID,
    version_number: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение версии по номеру"""
    version_service = VersionService(db)

    try:
        version = await version_service.get_version(project_id, version_number, current_user.id)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    if not version:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project or version not found")

    return ApiResponse(data=VersionResponse.model_validate(version))


@router.post(
    "/{version_number}/restore",
    response_model=ApiResponse[VersionResponse],
    status_code=status.HTTP_201_CREATED
)
async def restore_version(
    project_id: uuid.UUID,
    version_number: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Восстановление проекта из версии"""
    version_service = VersionService(db)

    try:
        version = await version_service.restore_version(project_id, version_number, current_user.id)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not version:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project or version not found")

    return ApiResponse(data=VersionResponse.model_validate(version))
