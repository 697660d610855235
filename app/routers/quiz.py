from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.deps import get_quiz_forwarder
from app.errors import ServiceError
from app.logging_config import get_logger
from app.services.quiz_service import QuizForwarder

router = APIRouter()
logger = get_logger(__name__)


@router.post("/submit")
async def submit_quiz(
    quiz_data: Dict[str, Any] = Body(...),
    forwarder: QuizForwarder = Depends(get_quiz_forwarder),
):
    logger.info("quiz_submission_received", recommended_service=quiz_data.get("recommendedService"))

    try:
        await forwarder.forward(quiz_data)
    except ServiceError as e:
        logger.error("quiz_submission_error", error=e.message, detail=e.detail)
        return JSONResponse(status_code=500, content={"success": False, "error": e.message})

    return {
        "success": True,
        "message": "Quiz response saved successfully",
        "recommendedService": quiz_data.get("recommendedService"),
    }
