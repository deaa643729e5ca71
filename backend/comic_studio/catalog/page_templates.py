"""
Page template drafts: defaults, normalization and required-field checks.

A draft is the loose, fully-defaulted shape a form edits. It is turned into a
persistence payload with ``build_payload`` once ``validate_draft`` passes.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .common import (
    DraftValidation,
    clean_value,
    coalesce,
    drop_unset,
    is_blank,
    labels_for,
    read_field,
    slugify,
)

PageTemplateType = Literal["story", "cover", "character", "other"]
PageTemplateOrientation = Literal["portrait", "landscape", "square"]
PageTemplateLayout = Literal["single", "grid", "custom"]
PageTemplateResolutionTier = Literal["standard", "hd", "uhd"]
CatalogStatus = Literal["active", "archived"]


class PageTemplateDraft(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: Optional[str] = None
    name: Optional[str] = None
    key: Optional[str] = None
    description: Optional[str] = None
    type: Optional[PageTemplateType] = None
    orientation: Optional[PageTemplateOrientation] = None
    aspectRatio: Optional[str] = None
    layout: Optional[PageTemplateLayout] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    panelCount: Optional[int] = None
    gutter: Optional[float] = None
    safeArea: Optional[float] = None
    resolutionTier: Optional[PageTemplateResolutionTier] = None
    status: Optional[CatalogStatus] = None
    isDefault: Optional[bool] = None


EMPTY_DRAFT = PageTemplateDraft(
    name="",
    key="",
    description="",
    type="story",
    orientation="portrait",
    aspectRatio="9:16",
    layout="single",
    rows=1,
    cols=1,
    panelCount=1,
    gutter=16,
    safeArea=24,
    resolutionTier="hd",
    status="active",
    isDefault=False,
)

_DRAFT_FIELDS = [f for f in PageTemplateDraft.model_fields if f != "id"]


def build_draft(source: Any = None) -> PageTemplateDraft:
    """Fill every unset field of ``source`` from ``EMPTY_DRAFT``. Never validates."""
    values: Dict[str, Any] = {"id": read_field(source, "id")}
    for field in _DRAFT_FIELDS:
        values[field] = coalesce(read_field(source, field), getattr(EMPTY_DRAFT, field))
    return PageTemplateDraft.model_construct(**values)


def build_payload(draft: PageTemplateDraft) -> Dict[str, Any]:
    rows = max(coalesce(draft.rows, 1), 1)
    cols = max(coalesce(draft.cols, 1), 1)
    if draft.layout == "grid":
        panel_count = rows * cols
    else:
        panel_count = max(coalesce(draft.panelCount, 1), 1)

    return drop_unset({
        "name": (draft.name or "").strip(),
        "key": clean_value(draft.key),
        "description": clean_value(draft.description),
        "type": draft.type or "story",
        "orientation": draft.orientation or "portrait",
        "aspectRatio": clean_value(draft.aspectRatio) or "9:16",
        "layout": draft.layout or "single",
        "rows": rows,
        "cols": cols,
        "panelCount": panel_count,
        "gutter": max(coalesce(draft.gutter, 0), 0),
        "safeArea": max(coalesce(draft.safeArea, 0), 0),
        "resolutionTier": draft.resolutionTier or "hd",
        "status": draft.status or "active",
        "isDefault": coalesce(draft.isDefault, False),
    })


def validate_draft(draft: PageTemplateDraft) -> DraftValidation:
    missing: List[str] = []

    if is_blank(draft.name):
        missing.append("name")
    if is_blank(draft.key):
        missing.append("key")
    if is_blank(draft.aspectRatio):
        missing.append("aspectRatio")

    # rows/cols only matter for multi-panel layouts; panelCount is always checked
    multi_panel = draft.layout in ("grid", "custom")
    if multi_panel and not draft.rows:
        missing.append("rows")
    if multi_panel and not draft.cols:
        missing.append("cols")

    if not draft.panelCount or draft.panelCount < 1:
        missing.append("panelCount")

    return DraftValidation(valid=not missing, missing=missing)


REQUIRED_LABELS: Dict[str, str] = {
    "name": "Template name",
    "key": "Key",
    "aspectRatio": "Aspect ratio",
    "rows": "Rows",
    "cols": "Columns",
    "panelCount": "Panel count",
}


def missing_labels(missing: List[str]) -> List[str]:
    return labels_for(missing, REQUIRED_LABELS)


def suggest_key(draft: PageTemplateDraft) -> str:
    """Use the draft's key if set, otherwise derive one from its name."""
    return clean_value(draft.key) or slugify(draft.name or "")


TEMPLATE_TYPE_OPTIONS: List[Tuple[str, str]] = [
    ("story", "Story page"),
    ("cover", "Cover page"),
    ("character", "Character detail"),
    ("other", "Other"),
]

TEMPLATE_ORIENTATION_OPTIONS: List[Tuple[str, str]] = [
    ("portrait", "Portrait"),
    ("landscape", "Landscape"),
    ("square", "Square"),
]

TEMPLATE_LAYOUT_OPTIONS: List[Tuple[str, str]] = [
    ("single", "Single panel"),
    ("grid", "Grid"),
    ("custom", "Custom"),
]

TEMPLATE_RESOLUTION_OPTIONS: List[Tuple[str, str]] = [
    ("standard", "Standard"),
    ("hd", "High Definition"),
    ("uhd", "Ultra High Definition"),
]

ASPECT_RATIO_OPTIONS_BY_ORIENTATION: Dict[str, List[Tuple[str, str]]] = {
    "portrait": [
        ("9:16", "9:16 (Vertical story)"),
        ("3:4", "3:4 (Classic portrait)"),
        ("2:3", "2:3 (Tall portrait)"),
    ],
    "landscape": [
        ("16:9", "16:9 (Cinematic wide)"),
        ("4:3", "4:3 (Classic landscape)"),
        ("3:2", "3:2 (Wide panel)"),
    ],
    "square": [("1:1", "1:1 (Square)")],
}


def aspect_ratio_options(orientation: Optional[str] = None) -> List[Tuple[str, str]]:
    return ASPECT_RATIO_OPTIONS_BY_ORIENTATION.get(
        orientation or "portrait", ASPECT_RATIO_OPTIONS_BY_ORIENTATION["portrait"]
    )


def default_aspect_ratio(orientation: Optional[str] = None) -> str:
    options = aspect_ratio_options(orientation)
    return options[0][0] if options else "9:16"


def with_orientation(draft: PageTemplateDraft, orientation: str) -> PageTemplateDraft:
    """
    Switch orientation, keeping the aspect ratio only if the new orientation
    offers it.
    """
    allowed = [value for value, _ in aspect_ratio_options(orientation)]
    aspect_ratio = draft.aspectRatio if draft.aspectRatio in allowed else default_aspect_ratio(orientation)
    return draft.model_copy(update={"orientation": orientation, "aspectRatio": aspect_ratio})
