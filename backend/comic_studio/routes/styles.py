"""
Style routes - catalog CRUD, draft checks, Gemini extraction and previews
"""
from fastapi import APIRouter, Body, Depends, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from ..catalog import styles as drafts
from ..clients import gemini, storage
from ..config import settings
from ..db import get_db
from ..exceptions import BadRequestError, StyleNotFoundError
from ..logger import logger
from ..schemas import (
    DraftPayloadResponse,
    DraftValidationResponse,
    OkResponse,
    PreviewImageUploadRequest,
    PreviewImageUploadResponse,
    Style,
    StyleCreate,
    StyleExtractRequest,
    StyleExtractResponse,
    StyleListResponse,
    StylePreviewPromptResponse,
    StylePreviewRequest,
    StylePreviewResponse,
    StyleUpdate,
)
from ..services import integrations
from ..services import styles as service
from .common import list_query

router = APIRouter(prefix="/styles", tags=["Styles"])


@router.get("", response_model=StyleListResponse)
async def list_styles(
    page: Optional[str] = Query(None),
    pageSize: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List styles, most recently updated first"""
    result = await service.list_styles(db, **list_query(page, pageSize, q, status))
    return StyleListResponse(
        data=[service.style_to_schema(row) for row in result.data],
        total=result.total,
        page=result.page,
        pageSize=result.page_size,
    )


@router.post("/drafts/validate", response_model=DraftValidationResponse)
async def validate_style_draft(body: Optional[drafts.StyleDraft] = Body(None)):
    draft = drafts.build_draft(body)
    validation = drafts.validate_draft(draft)
    return DraftValidationResponse(
        valid=validation.valid,
        missing=validation.missing,
        labels=drafts.missing_labels(validation.missing),
    )


@router.post("/drafts/payload", response_model=DraftPayloadResponse)
async def build_style_payload(body: Optional[drafts.StyleDraft] = Body(None)):
    draft = drafts.build_draft(body)
    validation = drafts.validate_draft(draft)
    return DraftPayloadResponse(
        payload=drafts.build_payload(draft),
        valid=validation.valid,
        missing=validation.missing,
        suggestedKey=drafts.suggest_key(draft),
    )


@router.post("/drafts/preview-prompt", response_model=StylePreviewPromptResponse)
async def build_style_preview_prompt(body: Optional[drafts.StyleDraft] = Body(None)):
    """
    Text prompt for a preview of the draft, plus the hash used to name the
    stored preview image
    """
    draft = drafts.build_draft(body)
    prompt = drafts.build_preview_prompt(draft)
    negative_prompt = (draft.negativePrompt or "").strip() or None
    return StylePreviewPromptResponse(
        prompt=prompt,
        negativePrompt=negative_prompt,
        promptHash=drafts.preview_prompt_hash(prompt, negative_prompt),
        styleKey=drafts.suggest_key(draft),
    )


@router.post("/extract", response_model=StyleExtractResponse)
async def extract_style(payload: StyleExtractRequest, db: AsyncSession = Depends(get_db)):
    """Turn a description or a reference image into style fields with Gemini"""
    api_key, model = await integrations.resolve_gemini(db)

    if payload.source == "prompt":
        if not payload.prompt:
            raise BadRequestError("Prompt is required.", "INVALID_REQUEST")
        extracted = await run_in_threadpool(gemini.extract_style, api_key, model, prompt=payload.prompt)
    else:
        if payload.image is None or not payload.image.data:
            raise BadRequestError("Image data is required.", "INVALID_REQUEST")
        extracted = await run_in_threadpool(
            gemini.extract_style,
            api_key,
            model,
            image_data=payload.image.data,
            image_mime_type=payload.image.mimeType,
        )

    return StyleExtractResponse(style=extracted)


@router.post("/preview", response_model=StylePreviewResponse)
async def generate_style_preview(payload: StylePreviewRequest, db: AsyncSession = Depends(get_db)):
    api_key, _ = await integrations.resolve_gemini(db)
    prompt = gemini.compose_preview_prompt(payload.prompt, payload.negativePrompt)
    logger.info("Generating style preview", extra={"model": settings.GEMINI_IMAGE_MODEL})
    data_url = await run_in_threadpool(
        gemini.generate_preview_image, api_key, settings.GEMINI_IMAGE_MODEL, prompt
    )
    return StylePreviewResponse(dataUrl=data_url)


@router.post("/preview-image", response_model=PreviewImageUploadResponse)
async def upload_style_preview(payload: PreviewImageUploadRequest):
    """Store a generated or uploaded preview and return its public URL"""
    url = await run_in_threadpool(
        storage.upload_style_preview,
        payload.dataUrl,
        style_key=payload.styleKey,
        style_id=payload.styleId,
        prompt_hash=payload.promptHash,
    )
    return PreviewImageUploadResponse(url=url)


@router.get("/{style_id}", response_model=Style)
async def get_style(style_id: str, db: AsyncSession = Depends(get_db)):
    row = await service.get_style(db, style_id)
    if row is None:
        raise StyleNotFoundError(style_id)
    return service.style_to_schema(row)


@router.post("", response_model=Style, status_code=201)
async def create_style(payload: StyleCreate, db: AsyncSession = Depends(get_db)):
    row = await service.create_style(db, payload.model_dump(exclude_none=True))
    return service.style_to_schema(row)


@router.put("/{style_id}", response_model=Style)
async def update_style(style_id: str, payload: StyleUpdate, db: AsyncSession = Depends(get_db)):
    """Partial update; visualStyle and safety are merged key by key"""
    row = await service.update_style(db, style_id, payload.model_dump(exclude_none=True))
    if row is None:
        raise StyleNotFoundError(style_id)
    return service.style_to_schema(row)


@router.delete("/{style_id}", response_model=OkResponse)
async def delete_style(style_id: str, db: AsyncSession = Depends(get_db)):
    if not await service.delete_style(db, style_id):
        raise StyleNotFoundError(style_id)
    return OkResponse(ok=True)
