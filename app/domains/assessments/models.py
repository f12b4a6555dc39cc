from datetime import datetime
from typing import List, Optional

from odmantic import Field as OdmField, Model


class AssessmentModel(Model):
    """
    One health-intake submission. `user_id` is a soft reference (string) to users.
    Nothing enforces one record per user; every submission is kept.
    """
    user_id: str
    user_name: str
    user_email: str

    full_name: str
    date_of_birth: str
    gender: str
    region: str
    phone_number: Optional[str] = None
    height: str
    weight: str
    physical_activity_level: str
    smoking: str
    alcohol_consumption: str
    sleep_hours: str
    meals_per_day: str
    chronic_diseases: List[str] = OdmField(default_factory=list)
    medical_treatment: str
    allergies_intolerances: List[str] = OdmField(default_factory=list)
    other_allergies: Optional[str] = None
    main_objective: str
    other_objective: Optional[str] = None

    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "assessments"}
