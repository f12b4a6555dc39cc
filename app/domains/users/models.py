from datetime import datetime
from typing import List, Optional

from odmantic import EmbeddedModel, Field as OdmField, Model
from pydantic import EmailStr

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class Profile(EmbeddedModel):
    age: Optional[int] = None
    gender: Optional[str] = None
    lifestyle: Optional[str] = None
    habits: List[str] = OdmField(default_factory=list)
    diseases: List[str] = OdmField(default_factory=list)
    dietary_preferences: List[str] = OdmField(default_factory=list)
    calorie_goal: Optional[int] = None
    protein_goal: Optional[int] = None
    carb_goal: Optional[int] = None
    fat_goal: Optional[int] = None


class AssessmentSnapshot(EmbeddedModel):
    """
    Point-in-time copy of the user's latest submitted assessment.
    Not kept in sync with the assessments collection; all fields are empty
    until the first submission.
    """
    full_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    region: Optional[str] = None
    phone_number: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    physical_activity_level: Optional[str] = None
    smoking: Optional[str] = None
    alcohol_consumption: Optional[str] = None
    sleep_hours: Optional[str] = None
    meals_per_day: Optional[str] = None
    chronic_diseases: List[str] = OdmField(default_factory=list)
    medical_treatment: Optional[str] = None
    allergies_intolerances: List[str] = OdmField(default_factory=list)
    other_allergies: Optional[str] = None
    main_objective: Optional[str] = None
    other_objective: Optional[str] = None


class UserModel(Model):
    """
    Odmantic model for 'users' collection.
    The unique index on email is created at application startup.
    """
    name: str
    email: EmailStr
    password_hash: str
    role: str = OdmField(default=ROLE_USER)  # 'user' | 'admin'
    has_completed_assessment: bool = OdmField(default=False)
    profile: Profile = OdmField(default_factory=Profile)
    assessment: AssessmentSnapshot = OdmField(default_factory=AssessmentSnapshot)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "users"}
