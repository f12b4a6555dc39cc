"""
Assessment submission plus the admin reporting views over assessments.
"""

import logging
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from odmantic import AIOEngine

from app.core.exceptions import NotFoundError
from app.core.security import Identity
from app.domains.assessments.models import AssessmentModel
from app.domains.assessments.schemas import AssessmentCreate, AssessmentDB
from app.domains.users.models import AssessmentSnapshot, UserModel
from app.domains.users.services import get_user_by_id
from app.helpers.serialize import model_to_dto, oid_to_str, utc_naive, utcnow

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)


async def submit_assessment(engine: AIOEngine, *, actor: Identity, payload: AssessmentCreate) -> AssessmentModel:
    """
    Store a new assessment record, flag the user as onboarded and copy the
    answers onto the user document as a point-in-time snapshot.
    """
    user = await get_user_by_id(engine, actor.id)
    if user is None:
        raise NotFoundError("User not found")

    answers = payload.model_dump()
    now = utcnow()
    assessment = AssessmentModel(
        user_id=actor.id,
        user_name=actor.name,
        user_email=actor.email,
        created_at=now,
        updated_at=now,
        **answers,
    )
    await engine.save(assessment)

    user.has_completed_assessment = True
    user.assessment = AssessmentSnapshot(**answers)
    user.updated_at = now
    await engine.save(user)

    logger.info(f"Assessment id={assessment.id} stored for user_id={actor.id}")
    return assessment


async def list_assessments(
    engine: AIOEngine,
    *,
    user_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[AssessmentModel]:
    filters = []
    if user_id:
        filters.append(AssessmentModel.user_id == user_id)
    if start_date:
        filters.append(AssessmentModel.created_at >= utc_naive(start_date))
    if end_date:
        filters.append(AssessmentModel.created_at <= utc_naive(end_date))
    return await engine.find(AssessmentModel, *filters, sort=AssessmentModel.created_at.desc())


async def sync_assessments(engine: AIOEngine) -> Dict[str, Any]:
    """
    All assessments, each enriched with its owner's public identity
    (null fields when the owner account no longer exists).
    """
    started = time.monotonic()
    assessments = await list_assessments(engine)
    enriched = []
    for assessment in assessments:
        owner = await get_user_by_id(engine, assessment.user_id)
        data = model_to_dto(assessment, AssessmentDB).model_dump(by_alias=True)
        data["userData"] = {
            "id": oid_to_str(owner.id) if owner else None,
            "name": owner.name if owner else None,
            "email": owner.email if owner else None,
            "role": owner.role if owner else None,
        }
        enriched.append(data)
    return {
        "totalAssessments": len(assessments),
        "assessments": enriched,
        "timestamp": utcnow().isoformat(),
        "duration": int((time.monotonic() - started) * 1000),
    }


async def assessment_stats(engine: AIOEngine) -> Dict[str, int]:
    total = await engine.count(AssessmentModel)
    distinct_users = await engine.get_collection(AssessmentModel).distinct(+AssessmentModel.user_id)
    recent = await engine.count(AssessmentModel, AssessmentModel.created_at >= utcnow() - RECENT_WINDOW)
    user_total = await engine.count(UserModel)
    percentage = round(len(distinct_users) / user_total * 100) if user_total else 0
    return {
        "totalAssessments": total,
        "usersWithAssessment": len(distinct_users),
        "recentAssessments": recent,
        "percentage": percentage,
    }
