# app/api/v1/endpoints/upload.py
"""
Media uploads for the content library and branding (images and videos).
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.core.exceptions import ValidationError
from app.core.security import Identity, get_identity, require_admin
from app.domains.media import services as media_services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/upload", tags=["upload"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    type: str = Form(media_services.KIND_IMAGE),
    identity: Identity = Depends(get_identity),
):
    if file is None:
        raise ValidationError("No file provided")

    # Reject on the declared type and spooled size before pulling the body into memory
    media_services.validate_upload(type, file.content_type, file.size or 0)
    data = await file.read()
    result = await media_services.upload_media(data, kind=type, content_type=file.content_type)
    logger.info(f"User {identity.id} uploaded {file.filename} as {result['publicId']}")
    return {"message": "File uploaded successfully", **result}


@router.delete("")
async def delete_file(
    public_id: str = Query(..., alias="publicId", min_length=1),
    admin: Identity = Depends(require_admin),
):
    await media_services.delete_media(public_id)
    return {"message": "File deleted successfully"}
