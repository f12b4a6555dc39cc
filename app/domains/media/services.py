"""
Media storage on an S3-compatible bucket (uploaded images and videos for the
content library and branding).
Handles validation, upload and deletion; boto3 calls run in the threadpool.
"""

import logging
import secrets
import time
from typing import Dict, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError

logger = logging.getLogger(__name__)

KIND_IMAGE = "image"
KIND_VIDEO = "video"

MB = 1024 * 1024
MAX_IMAGE_SIZE_BYTES = 50 * MB
MAX_VIDEO_SIZE_BYTES = 500 * MB

ALLOWED_IMAGE_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]
ALLOWED_VIDEO_MIME_TYPES = ["video/mp4", "video/webm", "video/quicktime"]

FOLDER_ROOT = "nutrition-app"


def get_media_client():
    """Get configured boto3 client for the media bucket"""
    return boto3.client(
        "s3",
        endpoint_url=settings.MEDIA_ENDPOINT_URL,
        aws_access_key_id=settings.MEDIA_ACCESS_KEY_ID,
        aws_secret_access_key=settings.MEDIA_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
        region_name=settings.MEDIA_REGION,
    )


def validate_upload(kind: str, content_type: Optional[str], size_bytes: int) -> None:
    """
    Raise ValidationError when the file does not fit the allow-list or size cap
    for its kind ('video'; anything else is treated as an image).
    """
    if kind == KIND_VIDEO:
        allowed, max_size, allowed_label, max_label = ALLOWED_VIDEO_MIME_TYPES, MAX_VIDEO_SIZE_BYTES, "MP4, WebM, MOV", "500MB"
    else:
        allowed, max_size, allowed_label, max_label = ALLOWED_IMAGE_MIME_TYPES, MAX_IMAGE_SIZE_BYTES, "JPEG, PNG, GIF, WebP", "50MB"

    if content_type not in allowed:
        raise ValidationError(f"Invalid file type. Accepted: {allowed_label}")
    if size_bytes > max_size:
        raise ValidationError(f"File too large. Max: {max_label}")


def build_object_key(kind: str) -> str:
    folder = "videos" if kind == KIND_VIDEO else "images"
    return f"{FOLDER_ROOT}/{folder}/{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def public_url(key: str) -> str:
    if settings.MEDIA_PUBLIC_BASE_URL:
        return f"{settings.MEDIA_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    return f"{(settings.MEDIA_ENDPOINT_URL or '').rstrip('/')}/{settings.MEDIA_BUCKET}/{key}"


async def upload_media(data: bytes, *, kind: str, content_type: str) -> Dict[str, str]:
    """
    Upload bytes to the media bucket. Returns {"url", "publicId"}; the public id
    is the object key and is what delete_media expects.
    """
    validate_upload(kind, content_type, len(data))
    key = build_object_key(kind)
    client = get_media_client()
    try:
        await run_in_threadpool(
            client.put_object,
            Bucket=settings.MEDIA_BUCKET,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Media upload failed for key={key}: {e}", exc_info=True)
        raise InternalError("Error while uploading the file")

    logger.info(f"Uploaded {kind} ({len(data)} bytes) to {key}")
    return {"url": public_url(key), "publicId": key}


async def delete_media(public_id: str) -> Dict[str, str]:
    client = get_media_client()
    try:
        await run_in_threadpool(client.delete_object, Bucket=settings.MEDIA_BUCKET, Key=public_id)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Media delete failed for key={public_id}: {e}", exc_info=True)
        raise InternalError("Error while deleting the file")
    logger.info(f"Deleted media object {public_id}")
    return {"result": "ok"}
