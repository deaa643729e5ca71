from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import PageTemplate as PageTemplateModel
from ..schemas import PageTemplate
from . import catalog

KIND = "page_template"

# API field -> column
FIELD_MAP = {
    "name": "name",
    "key": "key",
    "description": "description",
    "type": "type",
    "orientation": "orientation",
    "aspectRatio": "aspect_ratio",
    "layout": "layout",
    "rows": "rows",
    "cols": "cols",
    "panelCount": "panel_count",
    "gutter": "gutter",
    "safeArea": "safe_area",
    "resolutionTier": "resolution_tier",
    "status": "status",
    "isDefault": "is_default",
}


def page_template_to_schema(row: PageTemplateModel) -> PageTemplate:
    return PageTemplate(
        id=row.id,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
        **{field: getattr(row, column) for field, column in FIELD_MAP.items()},
    )


async def list_page_templates(
    db: AsyncSession,
    *,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> catalog.CatalogPage:
    return await catalog.list_entries(
        db, PageTemplateModel, page=page, page_size=page_size, search=search, status=status
    )


async def get_page_template(db: AsyncSession, template_id: str) -> Optional[PageTemplateModel]:
    return await catalog.get_entry(db, PageTemplateModel, template_id)


async def create_page_template(db: AsyncSession, data: Mapping[str, Any]) -> PageTemplateModel:
    return await catalog.create_entry(db, PageTemplateModel, data, FIELD_MAP, kind=KIND)


async def update_page_template(
    db: AsyncSession, template_id: str, data: Mapping[str, Any]
) -> Optional[PageTemplateModel]:
    return await catalog.update_entry(db, PageTemplateModel, template_id, data, FIELD_MAP, kind=KIND)


async def delete_page_template(db: AsyncSession, template_id: str) -> bool:
    return await catalog.delete_entry(db, PageTemplateModel, template_id, kind=KIND)
