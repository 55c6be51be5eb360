from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Базовая схема: camelCase в JSON, snake_case в Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Обертка успешного ответа"""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    loc: List[Any]
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Обертка ответа с ошибкой"""
    success: bool = False
    error: str
    details: Optional[List[ErrorDetail]] = None
