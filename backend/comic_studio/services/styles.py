from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ComicStyle as ComicStyleModel
from ..schemas import Style
from . import catalog

KIND = "style"

FIELD_MAP = {
    "name": "name",
    "key": "key",
    "description": "description",
    "status": "status",
    "isDefault": "is_default",
    "previewImageUrl": "preview_image_url",
    "visualStyle": "visual_style",
    "systemPrompt": "system_prompt",
    "promptTemplate": "prompt_template",
    "technicalTags": "technical_tags",
    "negativePrompt": "negative_prompt",
    "continuityRules": "continuity_rules",
    "formatGuidelines": "format_guidelines",
    "interactionLanguage": "interaction_language",
    "promptLanguage": "prompt_language",
    "safety": "safety",
}

NESTED_DEFAULTS = {
    "visualStyle": {},
    "safety": {"sfwOnly": True},
}


def style_to_schema(row: ComicStyleModel) -> Style:
    values = {field: getattr(row, column) for field, column in FIELD_MAP.items()}
    values["visualStyle"] = values["visualStyle"] or {}
    values["safety"] = {**NESTED_DEFAULTS["safety"], **(values["safety"] or {})}
    return Style(id=row.id, createdAt=row.created_at, updatedAt=row.updated_at, **values)


async def list_styles(
    db: AsyncSession,
    *,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> catalog.CatalogPage:
    return await catalog.list_entries(
        db, ComicStyleModel, page=page, page_size=page_size, search=search, status=status
    )


async def get_style(db: AsyncSession, style_id: str) -> Optional[ComicStyleModel]:
    return await catalog.get_entry(db, ComicStyleModel, style_id)


async def create_style(db: AsyncSession, data: Mapping[str, Any]) -> ComicStyleModel:
    return await catalog.create_entry(
        db, ComicStyleModel, data, FIELD_MAP, kind=KIND, nested_defaults=NESTED_DEFAULTS
    )


async def update_style(db: AsyncSession, style_id: str, data: Mapping[str, Any]) -> Optional[ComicStyleModel]:
    return await catalog.update_entry(
        db, ComicStyleModel, style_id, data, FIELD_MAP, kind=KIND, nested=list(NESTED_DEFAULTS)
    )


async def delete_style(db: AsyncSession, style_id: str) -> bool:
    return await catalog.delete_entry(db, ComicStyleModel, style_id, kind=KIND)
