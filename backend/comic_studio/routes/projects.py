"""
Comic project routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ..db import get_db
from ..schemas import ComicProject, ComicProjectCreate
from ..services import projects as service

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=List[ComicProject])
async def list_projects(db: AsyncSession = Depends(get_db)):
    rows = await service.list_projects(db)
    return [service.project_to_schema(row) for row in rows]


@router.post("", response_model=ComicProject, status_code=201)
async def create_project(payload: ComicProjectCreate, db: AsyncSession = Depends(get_db)):
    row = await service.create_project(db, payload.model_dump(exclude_none=True))
    return service.project_to_schema(row)
