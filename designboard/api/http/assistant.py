import logging

from fastapi import APIRouter, HTTPException, status

from designboard.domains.assistant import (
    generate_mock_elements, ProcessCommandRequest, CanvasElement, ProcessCommandResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["assistant"])


@router.post("/process-command", response_model=ProcessCommandResponse)
async def process_command(request: ProcessCommandRequest):
    """Обработка текстовой команды ассистентом"""
    if not request.command or not request.command.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Command is required"
        )

    elements = generate_mock_elements(request.command)
    logger.info(f"Command processed into {len(elements)} element(s), mode={request.mode}")

    return ProcessCommandResponse(
        elements=[CanvasElement(**element) for element in elements],
        message=f'Created elements based on: "{request.command}"'
    )
