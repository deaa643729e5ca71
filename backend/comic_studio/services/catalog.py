from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..logger import logger

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
# Largest page whose offset still fits a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class CatalogPage(Generic[T]):
    data: List[T]
    total: int
    page: int
    page_size: int


def clamp_page(page: Optional[int]) -> int:
    return min(max(page if page is not None else 1, 1), MAX_PAGE)


def clamp_page_size(page_size: Optional[int]) -> int:
    size = page_size if page_size is not None else DEFAULT_PAGE_SIZE
    return min(max(size, 1), MAX_PAGE_SIZE)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filters(model, search: Optional[str], status: Optional[str]) -> list:
    filters = []
    if status:
        filters.append(model.status == status)
    if search:
        pattern = f"%{_escape_like(search)}%"
        filters.append(
            or_(
                model.name.ilike(pattern, escape="\\"),
                model.key.ilike(pattern, escape="\\"),
                model.description.ilike(pattern, escape="\\"),
            )
        )
    return filters


async def list_entries(
    db: AsyncSession,
    model,
    *,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> CatalogPage:
    """
    One page of catalog rows, most recently updated first.

    ``total`` counts every row matching the same search/status predicate so
    callers can compute the number of pages.
    """
    page = clamp_page(page)
    page_size = clamp_page_size(page_size)
    filters = _filters(model, search, status)

    query = (
        select(model)
        .where(*filters)
        .order_by(desc(model.updated_at), model.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await db.execute(query)).scalars().all()
    total = (await db.execute(select(func.count()).select_from(model).where(*filters))).scalar_one()

    return CatalogPage(data=list(rows), total=int(total), page=page, page_size=page_size)


async def get_entry(db: AsyncSession, model, entry_id: str):
    result = await db.execute(select(model).where(model.id == entry_id))
    return result.scalar_one_or_none()


async def clear_other_defaults(db: AsyncSession, model, exclude_id: str) -> int:
    """Unset ``is_default`` on every row of ``model`` except ``exclude_id``."""
    result = await db.execute(
        update(model)
        .where(model.id != exclude_id, model.is_default.is_(True))
        .values(is_default=False)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount or 0


def apply_fields(
    row,
    data: Mapping[str, Any],
    field_map: Mapping[str, str],
    nested: Sequence[str] = (),
) -> None:
    """
    Copy API fields onto ORM columns.

    Keys absent from ``data`` are left untouched; nested JSON objects listed in
    ``nested`` are merged key by key instead of replaced.
    """
    for field, value in data.items():
        column = field_map.get(field)
        if column is None:
            continue
        if field in nested:
            merged: Dict[str, Any] = dict(getattr(row, column) or {})
            merged.update(value or {})
            value = merged
        setattr(row, column, value)


async def _save_with_default(db: AsyncSession, model, row, kind: str):
    # Primary write first, then the sibling clean-up, committed together.
    await db.flush()
    if row.is_default:
        cleared = await clear_other_defaults(db, model, row.id)
        if cleared:
            logger.info(
                f"Cleared default flag on other {kind} entries",
                extra={"kind": kind, "default_id": row.id, "cleared": cleared},
            )
    await db.commit()
    await db.refresh(row)
    return row


async def create_entry(
    db: AsyncSession,
    model,
    data: Mapping[str, Any],
    field_map: Mapping[str, str],
    *,
    kind: str,
    nested_defaults: Optional[Mapping[str, Mapping[str, Any]]] = None,
):
    nested_defaults = nested_defaults or {}
    row = model()
    for field, defaults in nested_defaults.items():
        setattr(row, field_map[field], dict(defaults))
    apply_fields(row, data, field_map, list(nested_defaults))
    db.add(row)
    row = await _save_with_default(db, model, row, kind)
    logger.info(f"Created {kind}", extra={"kind": kind, "id": row.id, "is_default": row.is_default})
    return row


async def update_entry(
    db: AsyncSession,
    model,
    entry_id: str,
    data: Mapping[str, Any],
    field_map: Mapping[str, str],
    *,
    kind: str,
    nested: Sequence[str] = (),
):
    row = await get_entry(db, model, entry_id)
    if row is None:
        return None
    apply_fields(row, data, field_map, nested)
    row.updated_at = datetime.now(timezone.utc)
    row = await _save_with_default(db, model, row, kind)
    logger.info(f"Updated {kind}", extra={"kind": kind, "id": row.id, "fields": sorted(data.keys())})
    return row


async def delete_entry(db: AsyncSession, model, entry_id: str, *, kind: str) -> bool:
    result = await db.execute(delete(model).where(model.id == entry_id))
    await db.commit()
    removed = (result.rowcount or 0) == 1
    if removed:
        logger.info(f"Deleted {kind}", extra={"kind": kind, "id": entry_id})
    return removed
