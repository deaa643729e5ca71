"""
Object storage for style preview images.

Previews arrive as ``data:image/...;base64,`` URLs (straight from the preview
generator) and are stored under ``styles/<id-or-key>/preview/``.
"""
from __future__ import annotations

import base64
import binascii
import re
import time
from typing import Optional, Tuple

import boto3

from ..catalog.common import slugify
from ..config import settings
from ..exceptions import BadRequestError, IntegrationNotConfiguredError, StorageError
from ..logger import logger

s3 = boto3.client(
    "s3",
    aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
    aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
    region_name=settings.AWS_REGION_NAME,
    endpoint_url=settings.AWS_ENDPOINT_URL,
)

_DATA_URL_HEADER = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,")


def data_url_info(data_url: str) -> Tuple[str, str]:
    """Return (mime type, file extension); unknown headers fall back to PNG."""
    match = _DATA_URL_HEADER.match(data_url)
    mime_type = match.group(1) if match else "image/png"
    extension = mime_type.split("/")[1] or "png"
    return mime_type, extension


def decode_data_url(data_url: str) -> bytes:
    if not data_url.startswith("data:") or "," not in data_url:
        raise BadRequestError("Preview image must be a base64 data URL.", "INVALID_IMAGE")
    encoded = data_url.split(",", 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise BadRequestError("Preview image is not valid base64.", "INVALID_IMAGE")


def preview_object_key(
    extension: str,
    style_key: str = "",
    style_id: Optional[str] = None,
    prompt_hash: Optional[str] = None,
) -> str:
    safe_key = slugify(style_key) or "style"
    folder = f"styles/{style_id}" if style_id else f"styles/{safe_key}"
    file_name = prompt_hash or str(int(time.time() * 1000))
    return f"{folder}/preview/{file_name}.{extension}"


def public_url(key: str) -> str:
    bucket = settings.S3_BUCKET_NAME
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    if settings.AWS_ENDPOINT_URL:
        return f"{settings.AWS_ENDPOINT_URL.rstrip('/')}/{bucket}/{key}"
    return f"https://{bucket}.s3.{settings.AWS_REGION_NAME}.amazonaws.com/{key}"


def upload_style_preview(
    data_url: str,
    *,
    style_key: str = "",
    style_id: Optional[str] = None,
    prompt_hash: Optional[str] = None,
) -> str:
    """Store a preview image and return its public URL."""
    if not settings.S3_BUCKET_NAME:
        raise IntegrationNotConfiguredError("Storage")

    mime_type, extension = data_url_info(data_url)
    body = decode_data_url(data_url)
    key = preview_object_key(extension, style_key, style_id, prompt_hash)

    try:
        s3.put_object(
            Bucket=settings.S3_BUCKET_NAME,
            Key=key,
            Body=body,
            ContentType=mime_type,
        )
    except Exception as e:
        logger.error(f"Failed to upload preview to S3: {e}", extra={"key": key})
        raise StorageError(f"Failed to upload preview image: {str(e)}")

    logger.info(f"Uploaded style preview: {key}", extra={"key": key, "bytes": len(body)})
    return public_url(key)
