from __future__ import annotations

from typing import Any, List, Mapping

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..logger import logger
from ..models import ComicProject as ComicProjectModel
from ..schemas import ComicProject


def project_to_schema(row: ComicProjectModel) -> ComicProject:
    return ComicProject(
        id=row.id,
        title=row.title,
        synopsis=row.synopsis,
        status=row.status,
        styleId=row.style_id,
        pages=row.pages or [],
        coverImageUrl=row.cover_image_url,
        tags=row.tags,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


async def list_projects(db: AsyncSession) -> List[ComicProjectModel]:
    result = await db.execute(select(ComicProjectModel).order_by(desc(ComicProjectModel.created_at)))
    return list(result.scalars().all())


async def create_project(db: AsyncSession, data: Mapping[str, Any]) -> ComicProjectModel:
    project = ComicProjectModel(
        title=data["title"],
        synopsis=data.get("synopsis"),
        status=data.get("status") or "draft",
        style_id=data.get("styleId"),
        pages=data.get("pages") or [],
        cover_image_url=data.get("coverImageUrl"),
        tags=data.get("tags"),
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info(
        f"Created comic project {project.id}",
        extra={"project_id": project.id, "pages": len(project.pages or [])},
    )
    return project
