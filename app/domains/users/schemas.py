"""
app/domains/users/schemas.py

Pydantic schemas for the users domain (API contracts).

Notes:
 - UserPublic never carries password_hash.
 - Request bodies accept camelCase (web client) or snake_case.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field as PydField

from app.helpers.serialize import ApiSchema

Role = Literal["user", "admin"]


class UserRegister(ApiSchema):
    name: str = PydField(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = PydField(..., min_length=6)


class UserLogin(ApiSchema):
    email: EmailStr
    password: str = PydField(..., min_length=6)


class ProfileSchema(ApiSchema):
    age: Optional[int] = PydField(default=None, ge=0, le=150)
    gender: Optional[str] = None
    lifestyle: Optional[str] = None
    habits: List[str] = PydField(default_factory=list)
    diseases: List[str] = PydField(default_factory=list)
    dietary_preferences: List[str] = PydField(default_factory=list)
    calorie_goal: Optional[int] = PydField(default=None, ge=0)
    protein_goal: Optional[int] = PydField(default=None, ge=0)
    carb_goal: Optional[int] = PydField(default=None, ge=0)
    fat_goal: Optional[int] = PydField(default=None, ge=0)


class AssessmentSnapshotSchema(ApiSchema):
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
    chronic_diseases: List[str] = PydField(default_factory=list)
    medical_treatment: Optional[str] = None
    allergies_intolerances: List[str] = PydField(default_factory=list)
    other_allergies: Optional[str] = None
    main_objective: Optional[str] = None
    other_objective: Optional[str] = None


class UserPublic(ApiSchema):
    """
    Public-facing user representation returned by endpoints.
    """
    id: str = PydField(..., alias="_id")
    name: str
    email: EmailStr
    role: Role
    has_completed_assessment: bool = False
    profile: Optional[ProfileSchema] = None
    assessment: Optional[AssessmentSnapshotSchema] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserSummary(ApiSchema):
    """Minimal identity block: register/login responses and the specialist picker."""
    id: str
    name: str
    email: EmailStr


class UserAdminUpdate(ApiSchema):
    """Fields an admin may change on another account."""
    name: Optional[str] = PydField(default=None, min_length=2, max_length=50)
    role: Optional[Role] = None
    has_completed_assessment: Optional[bool] = None


class AuthResponse(ApiSchema):
    message: str
    user: UserSummary


class UserListResponse(ApiSchema):
    users: List[UserPublic]


class ProfileResponse(ApiSchema):
    user: UserPublic


class SpecialistListResponse(ApiSchema):
    specialists: List[UserSummary]
