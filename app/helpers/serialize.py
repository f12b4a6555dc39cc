# helpers/serialize.py  -- convert odmantic models to API-safe DTOs
from datetime import datetime, timezone
from typing import Optional, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DTO = TypeVar("DTO", bound=BaseModel)


class ApiSchema(BaseModel):
    """
    Base for request/response bodies.
    The web client speaks camelCase; Python code uses snake_case. Both are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def oid_to_str(obj_id):
    # Odmantic model.id is a BSON ObjectId -> convert to str
    return str(obj_id) if obj_id is not None else None


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Return an ObjectId, or None when the value is not a valid 24-hex id."""
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def utc_naive(value: datetime) -> datetime:
    """
    MongoDB stores naive UTC datetimes; normalize aware values before saving
    or querying so comparisons stay consistent.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def model_to_dto(model, dto_cls: Type[DTO]) -> DTO:
    """
    Convert an odmantic Model into its public Pydantic DTO.
    model_dump + model_validate gives correct aliasing and type coercion.
    """
    data = model.model_dump()
    data.pop("id", None)
    data["_id"] = oid_to_str(model.id)
    return dto_cls.model_validate(data)
