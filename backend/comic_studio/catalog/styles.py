"""
Comic style drafts.

Same shape as page template drafts, with two nested objects (``visualStyle``
and ``safety``) that are merged field by field onto their defaults.
"""
from __future__ import annotations

import hashlib
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from .common import (
    DraftValidation,
    clean_value,
    coalesce,
    drop_unset,
    is_blank,
    labels_for,
    merge_nested,
    read_field,
    slugify,
)

CatalogStatus = Literal["active", "archived"]

VISUAL_STYLE_KEYS = ["styleName", "medium", "lineart", "coloring", "lighting", "anatomy"]
REQUIRED_VISUAL_STYLE_KEYS = ["styleName", "medium", "lineart", "coloring", "lighting"]


class VisualStyleDraft(BaseModel):
    styleName: Optional[str] = None
    medium: Optional[str] = None
    lineart: Optional[str] = None
    coloring: Optional[str] = None
    lighting: Optional[str] = None
    anatomy: Optional[str] = None


class SafetyDraft(BaseModel):
    sfwOnly: Optional[bool] = None


class StyleDraft(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    key: Optional[str] = None
    description: Optional[str] = None
    status: Optional[CatalogStatus] = None
    isDefault: Optional[bool] = None
    previewImageUrl: Optional[str] = None
    visualStyle: Optional[VisualStyleDraft] = None
    systemPrompt: Optional[str] = None
    promptTemplate: Optional[str] = None
    technicalTags: Optional[str] = None
    negativePrompt: Optional[str] = None
    continuityRules: Optional[str] = None
    formatGuidelines: Optional[str] = None
    interactionLanguage: Optional[str] = None
    promptLanguage: Optional[str] = None
    safety: Optional[SafetyDraft] = None


EMPTY_DRAFT = StyleDraft(
    name="",
    key="",
    description="",
    status="active",
    isDefault=False,
    previewImageUrl="",
    visualStyle=VisualStyleDraft(
        styleName="",
        medium="",
        lineart="",
        coloring="",
        lighting="",
        anatomy="",
    ),
    systemPrompt="",
    promptTemplate="",
    technicalTags="",
    negativePrompt="",
    continuityRules="",
    formatGuidelines="",
    interactionLanguage="Italian",
    promptLanguage="English",
    safety=SafetyDraft(sfwOnly=True),
)

_NESTED = {"visualStyle": VisualStyleDraft, "safety": SafetyDraft}
_FLAT_FIELDS = [f for f in StyleDraft.model_fields if f != "id" and f not in _NESTED]


def build_draft(source: Any = None) -> StyleDraft:
    """Fill every unset field of ``source`` from ``EMPTY_DRAFT``. Never validates."""
    values: Dict[str, Any] = {"id": read_field(source, "id")}
    for field in _FLAT_FIELDS:
        values[field] = coalesce(read_field(source, field), getattr(EMPTY_DRAFT, field))
    for field, model in _NESTED.items():
        merged = merge_nested(getattr(EMPTY_DRAFT, field).model_dump(), read_field(source, field))
        values[field] = model.model_construct(**merged)
    return StyleDraft.model_construct(**values)


def _visual(draft: StyleDraft) -> VisualStyleDraft:
    return draft.visualStyle or VisualStyleDraft()


def build_payload(draft: StyleDraft) -> Dict[str, Any]:
    visual = _visual(draft)
    safety = draft.safety or SafetyDraft()

    return drop_unset({
        "name": (draft.name or "").strip(),
        "key": clean_value(draft.key),
        "description": clean_value(draft.description),
        "status": draft.status or "active",
        "isDefault": coalesce(draft.isDefault, False),
        "previewImageUrl": clean_value(draft.previewImageUrl),
        "visualStyle": drop_unset({
            key: clean_value(getattr(visual, key)) for key in VISUAL_STYLE_KEYS
        }),
        "systemPrompt": clean_value(draft.systemPrompt),
        "promptTemplate": clean_value(draft.promptTemplate),
        "technicalTags": clean_value(draft.technicalTags),
        "negativePrompt": clean_value(draft.negativePrompt),
        "continuityRules": clean_value(draft.continuityRules),
        "formatGuidelines": clean_value(draft.formatGuidelines),
        "interactionLanguage": clean_value(draft.interactionLanguage) or "Italian",
        "promptLanguage": clean_value(draft.promptLanguage) or "English",
        "safety": {"sfwOnly": coalesce(safety.sfwOnly, True)},
    })


def validate_draft(draft: StyleDraft) -> DraftValidation:
    missing: List[str] = []
    visual = _visual(draft)

    if is_blank(draft.name):
        missing.append("name")
    if is_blank(draft.key):
        missing.append("key")
    for key in REQUIRED_VISUAL_STYLE_KEYS:
        if is_blank(getattr(visual, key)):
            missing.append(key)
    for field in ("promptTemplate", "technicalTags", "negativePrompt", "interactionLanguage", "promptLanguage"):
        if is_blank(getattr(draft, field)):
            missing.append(field)

    return DraftValidation(valid=not missing, missing=missing)


REQUIRED_LABELS: Dict[str, str] = {
    "name": "Style name",
    "key": "Key",
    "styleName": "Style label",
    "medium": "Medium",
    "lineart": "Lineart",
    "coloring": "Coloring",
    "lighting": "Lighting",
    "promptTemplate": "Prompt template",
    "technicalTags": "Technical tags",
    "negativePrompt": "Negative prompt",
    "interactionLanguage": "Interaction language",
    "promptLanguage": "Prompt language",
}


def missing_labels(missing: List[str]) -> List[str]:
    return labels_for(missing, REQUIRED_LABELS)


def build_preview_prompt(draft: StyleDraft) -> str:
    """Describe the style in plain sentences for image preview generation."""
    lines: List[str] = []
    if clean_value(draft.name):
        lines.append(f"Style name: {draft.name.strip()}.")
    if clean_value(draft.description):
        lines.append(f"Description: {draft.description.strip()}.")

    visual = _visual(draft)
    for label, key in (
        ("Style", "styleName"),
        ("Medium", "medium"),
        ("Lineart", "lineart"),
        ("Coloring", "coloring"),
        ("Lighting", "lighting"),
        ("Anatomy", "anatomy"),
    ):
        value = getattr(visual, key)
        if value:
            lines.append(f"{label}: {value}.")

    if clean_value(draft.technicalTags):
        lines.append(f"Technical tags: {draft.technicalTags.strip()}.")
    if clean_value(draft.formatGuidelines):
        lines.append(f"Format guidelines: {draft.formatGuidelines.strip()}.")
    if clean_value(draft.continuityRules):
        lines.append(f"Continuity: {draft.continuityRules.strip()}.")
    if clean_value(draft.promptTemplate):
        lines.append(f"Prompt template reference:\n{draft.promptTemplate.strip()}")
    return "\n".join(lines)


def preview_prompt_hash(prompt: str, negative_prompt: Optional[str] = None) -> Optional[str]:
    """
    SHA-256 of the preview prompt and negative prompt.

    Used as the preview file name so the same prompt maps to the same object.
    """
    negative = clean_value(negative_prompt)
    parts = [p for p in (prompt.strip(), f"NEGATIVE:{negative}" if negative else "") if p]
    if not parts:
        return None
    return hashlib.sha256("\n".join(parts).encode("utf-8")).hexdigest()


def suggest_key(draft: StyleDraft) -> str:
    """Folder-safe style key: the explicit key or the name, always slugified."""
    return slugify(clean_value(draft.key) or draft.name or "") or "style"


# House style shipped with the studio; seeded as the default style.
DREAMWEAVER_PRESET = StyleDraft(
    name="DreamWeaver Style",
    key="dreamweaver-style",
    description="Default DreamWeaverComics visual style and prompt structure.",
    status="active",
    isDefault=True,
    visualStyle=VisualStyleDraft(
        styleName="DreamWeaverComics (2D Western Webcomic)",
        medium="Digital 2D Western Comic Book Art.",
        lineart="Crisp, thin, clean black ink outlines. No sketching, no rough pencils, no painterly styles.",
        coloring="Cel-shading (hard-edged shadows) mixed with soft gradients for skin/fabric volume. Flat, vibrant colors.",
        lighting="Cinematic and volumetric (e.g., TV glow, warm sunlight, dramatic shadows).",
        anatomy="Soft, volumetric, and expressive.",
    ),
    systemPrompt=(
        "You are DreamWeaverComics, a professional comic book artist and writer with expertise in "
        "creating high-quality digital comics for platforms like DeviantArt and Webtoon. You specialize "
        "in visual storytelling, Transformation (TF) themes, and expressive character consistency."
    ),
    promptTemplate="""### 🎨 Prompt: [Comic Title] - Page [X]

Subject:
[Brief summary of the action]

Visual Style (STRICT):
Style: DreamWeaverComics (2D Western Webcomic).
Format: [Horizontal 16:9 / Vertical Strip].
Lineart: Crisp, thin black ink outlines.
Coloring: Cel-shading.
Consistency: [Notes on character outfit/state to avoid errors].

Panel Layout ([Number] Panels - [Top to Bottom / Grid]):
- Panel 1: [Visual Description] + [Dialogue/Caption].
- Panel 2: ...

Technical Tags:
[format tags], DreamWeaverComics style, clean lineart, cel shading, [character tags], [action tags], [lighting tags], high quality.""",
    technicalTags=(
        "DreamWeaverComics style, clean lineart, cel shading, high quality, "
        "[character tags], [action tags], [lighting tags]"
    ),
    negativePrompt=(
        "photorealistic, 3D render, oil painting, watercolor, messy sketch, rough edges, bad anatomy, "
        "missing limbs, text glitches, NSFW, nudity, skinny (if character is heavy), wrong colors."
    ),
    continuityRules=(
        "Continuity: obsessively track character details (hair color, outfit state, body shape) "
        "from panel to panel to prevent resets."
    ),
    formatGuidelines=(
        "Ask the user if they want a Horizontal Page (16:9) or a Vertical Webtoon Strip before "
        "generating prompts."
    ),
    interactionLanguage="Italian",
    promptLanguage="English",
    safety=SafetyDraft(sfwOnly=True),
)
