"""
Survey API Routes - Public survey submission
"""

from fastapi import APIRouter, HTTPException, status
from typing import Any, Dict
import logging

from survey_admin.api import state
from survey_admin.models.survey import SurveySubmission
from survey_admin.services.errors import NetworkFailure

logger = logging.getLogger(__name__)

router = APIRouter(tags=["survey"])


@router.post("/survey", status_code=status.HTTP_201_CREATED)
async def submit_survey(submission: SurveySubmission) -> Dict[str, Any]:
    """
    Forward a validated survey submission to the backend.

    Raises:
        422: Submission failed validation
        502: Backend rejected or could not be reached
    """
    try:
        ack = await state.get_public_source().create_record(submission)
    except NetworkFailure as e:
        logger.error(f"Submission error: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="There was a problem submitting your form. Please try again.",
        )
    logger.info("Survey submitted")
    return {"success": True, "message": "Form submitted successfully!", "backend": ack}
