"""
Page template routes - catalog CRUD, draft checks and form options
"""
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from ..catalog import page_templates as drafts
from ..db import get_db
from ..exceptions import PageTemplateNotFoundError
from ..schemas import (
    DraftPayloadResponse,
    DraftValidationResponse,
    OkResponse,
    OptionItem,
    PageTemplate,
    PageTemplateCreate,
    PageTemplateListResponse,
    PageTemplateOptionsResponse,
    PageTemplateUpdate,
)
from ..services import page_templates as service
from .common import list_query

router = APIRouter(prefix="/page-templates", tags=["Page templates"])


def _options(pairs) -> list:
    return [OptionItem(value=value, label=label) for value, label in pairs]


@router.get("", response_model=PageTemplateListResponse)
async def list_page_templates(
    page: Optional[str] = Query(None),
    pageSize: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List page templates, most recently updated first"""
    result = await service.list_page_templates(db, **list_query(page, pageSize, q, status))
    return PageTemplateListResponse(
        data=[service.page_template_to_schema(row) for row in result.data],
        total=result.total,
        page=result.page,
        pageSize=result.page_size,
    )


@router.get("/options", response_model=PageTemplateOptionsResponse)
async def get_page_template_options(orientation: Optional[str] = Query(None)):
    """Choices offered by the template form; aspect ratios depend on orientation"""
    return PageTemplateOptionsResponse(
        types=_options(drafts.TEMPLATE_TYPE_OPTIONS),
        orientations=_options(drafts.TEMPLATE_ORIENTATION_OPTIONS),
        layouts=_options(drafts.TEMPLATE_LAYOUT_OPTIONS),
        resolutionTiers=_options(drafts.TEMPLATE_RESOLUTION_OPTIONS),
        aspectRatios=_options(drafts.aspect_ratio_options(orientation)),
        defaultAspectRatio=drafts.default_aspect_ratio(orientation),
    )


@router.post("/drafts/validate", response_model=DraftValidationResponse)
async def validate_page_template_draft(body: Optional[drafts.PageTemplateDraft] = Body(None)):
    draft = drafts.build_draft(body)
    validation = drafts.validate_draft(draft)
    return DraftValidationResponse(
        valid=validation.valid,
        missing=validation.missing,
        labels=drafts.missing_labels(validation.missing),
    )


@router.post("/drafts/payload", response_model=DraftPayloadResponse)
async def build_page_template_payload(body: Optional[drafts.PageTemplateDraft] = Body(None)):
    draft = drafts.build_draft(body)
    validation = drafts.validate_draft(draft)
    return DraftPayloadResponse(
        payload=drafts.build_payload(draft),
        valid=validation.valid,
        missing=validation.missing,
        suggestedKey=drafts.suggest_key(draft),
    )


@router.get("/{template_id}", response_model=PageTemplate)
async def get_page_template(template_id: str, db: AsyncSession = Depends(get_db)):
    row = await service.get_page_template(db, template_id)
    if row is None:
        raise PageTemplateNotFoundError(template_id)
    return service.page_template_to_schema(row)


@router.post("", response_model=PageTemplate, status_code=201)
async def create_page_template(payload: PageTemplateCreate, db: AsyncSession = Depends(get_db)):
    row = await service.create_page_template(db, payload.model_dump(exclude_none=True))
    return service.page_template_to_schema(row)


@router.put("/{template_id}", response_model=PageTemplate)
async def update_page_template(
    template_id: str,
    payload: PageTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update; omitted fields keep their stored value"""
    row = await service.update_page_template(db, template_id, payload.model_dump(exclude_none=True))
    if row is None:
        raise PageTemplateNotFoundError(template_id)
    return service.page_template_to_schema(row)


@router.delete("/{template_id}", response_model=OkResponse)
async def delete_page_template(template_id: str, db: AsyncSession = Depends(get_db)):
    if not await service.delete_page_template(db, template_id):
        raise PageTemplateNotFoundError(template_id)
    return OkResponse(ok=True)
