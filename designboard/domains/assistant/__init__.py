from designboard.domains.assistant.commands import generate_mock_elements
from designboard.domains.assistant.schemas import (
    ProcessCommandRequest, CanvasElement, ProcessCommandResponse
)

__all__ = [
    "generate_mock_elements",
    "ProcessCommandRequest", "CanvasElement", "ProcessCommandResponse"
]
