# app/api/v1/endpoints/assessment.py
from fastapi import APIRouter, Depends, status
from odmantic import AIOEngine

from app.core.security import Identity, get_identity, require_admin
from app.db.session import get_engine
from app.domains.assessments import services as assessment_services
from app.domains.assessments.schemas import (
    AssessmentCreate,
    AssessmentCreatedResponse,
    AssessmentDB,
    AssessmentListResponse,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/assessment", tags=["assessment"])


@router.post("", response_model=AssessmentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def submit_assessment(
    payload: AssessmentCreate,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Store the intake answers and mark the user's onboarding as complete.
    """
    assessment = await assessment_services.submit_assessment(engine, actor=identity, payload=payload)
    return AssessmentCreatedResponse(
        message="Assessment submitted successfully",
        assessment=model_to_dto(assessment, AssessmentDB),
    )


@router.get("", response_model=AssessmentListResponse)
async def list_assessments(
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    assessments = await assessment_services.list_assessments(engine)
    return AssessmentListResponse(assessments=[model_to_dto(a, AssessmentDB) for a in assessments])
