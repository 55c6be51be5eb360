from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from designboard.core.schemas import CamelModel


class ProcessCommandRequest(CamelModel):
    """Запрос к ассистенту"""
    command: Optional[str] = None
    mode: Optional[str] = None
    project_id: Optional[str] = None
    current_canvas: Optional[Any] = None


class CanvasElement(BaseModel):
    """Элемент, который клиент добавит на холст"""
    type: str
    x: int
    y: int
    props: Dict[str, Any]


class ProcessCommandResponse(BaseModel):
    """Ответ ассистента"""
    success: bool = True
    elements: List[CanvasElement]
    message: str
