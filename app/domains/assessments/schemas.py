from datetime import datetime
from typing import List, Optional

from pydantic import Field as PydField

from app.helpers.serialize import ApiSchema


class AssessmentCreate(ApiSchema):
    """Intake form submitted once at onboarding."""
    full_name: str = PydField(..., min_length=2)
    date_of_birth: str
    gender: str = PydField(..., min_length=1)
    region: str = PydField(..., min_length=1)
    phone_number: Optional[str] = None
    height: str = PydField(..., min_length=1)
    weight: str = PydField(..., min_length=1)
    physical_activity_level: str = PydField(..., min_length=1)
    smoking: str = PydField(..., min_length=1)
    alcohol_consumption: str = PydField(..., min_length=1)
    sleep_hours: str = PydField(..., min_length=1)
    meals_per_day: str = PydField(..., min_length=1)
    chronic_diseases: List[str] = PydField(default_factory=list)
    medical_treatment: str = PydField(..., min_length=1)
    allergies_intolerances: List[str] = PydField(default_factory=list)
    other_allergies: Optional[str] = None
    main_objective: str = PydField(..., min_length=1)
    other_objective: Optional[str] = None


class AssessmentDB(AssessmentCreate):
    id: str = PydField(..., alias="_id")
    user_id: str
    user_name: str
    user_email: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class AssessmentCreatedResponse(ApiSchema):
    message: str
    assessment: AssessmentDB


class AssessmentListResponse(ApiSchema):
    assessments: List[AssessmentDB]
