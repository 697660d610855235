from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.deps import get_email_service
from app.logging_config import get_logger
from app.schemas_pkg.assessment import AssessmentRequest, AssessmentResponse
from app.services.assessment_service import generate_analysis
from app.services.email_service import EmailService

router = APIRouter()
logger = get_logger(__name__)


@router.post("/analyze", response_model=AssessmentResponse)
async def analyze_assessment(body: AssessmentRequest, email: EmailService = Depends(get_email_service)):
    analysis = generate_analysis(body.answers)
    logger.info("assessment_scored", score=analysis.overall_score)

    try:
        await email.send_assessment_results(body.contact_info, analysis)
    except Exception as e:
        logger.error("assessment_error", error=str(e))
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to analyze assessment"})

    return AssessmentResponse(analysis=analysis)
