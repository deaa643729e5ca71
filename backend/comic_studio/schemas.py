"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

CatalogStatus = Literal["active", "archived"]

# ===== Common Schemas =====

class HealthResponse(BaseModel):
    status: str

class OkResponse(BaseModel):
    ok: bool = True

class DraftValidationResponse(BaseModel):
    valid: bool
    missing: List[str]
    labels: List[str]

class DraftPayloadResponse(BaseModel):
    payload: Dict[str, Any]
    valid: bool
    missing: List[str]
    suggestedKey: str

class OptionItem(BaseModel):
    value: str
    label: str

# ===== Page Template Schemas =====

PageTemplateType = Literal["story", "cover", "character", "other"]
PageTemplateOrientation = Literal["portrait", "landscape", "square"]
PageTemplateLayout = Literal["single", "grid", "custom"]
PageTemplateResolutionTier = Literal["standard", "hd", "uhd"]

class PageTemplateUpdate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: Optional[str] = Field(None, min_length=1)
    key: Optional[str] = None
    description: Optional[str] = None
    type: Optional[PageTemplateType] = None
    orientation: Optional[PageTemplateOrientation] = None
    aspectRatio: Optional[str] = Field(None, min_length=1)
    layout: Optional[PageTemplateLayout] = None
    rows: Optional[int] = Field(None, ge=1)
    cols: Optional[int] = Field(None, ge=1)
    panelCount: Optional[int] = Field(None, ge=1)
    gutter: Optional[float] = Field(None, ge=0)
    safeArea: Optional[float] = Field(None, ge=0)
    resolutionTier: Optional[PageTemplateResolutionTier] = None
    status: Optional[CatalogStatus] = None
    isDefault: Optional[bool] = None

class PageTemplateCreate(PageTemplateUpdate):
    name: str = Field(..., min_length=1)

class PageTemplate(BaseModel):
    id: str
    name: str
    key: Optional[str] = None
    description: Optional[str] = None
    type: PageTemplateType
    orientation: PageTemplateOrientation
    aspectRatio: str
    layout: PageTemplateLayout
    rows: int
    cols: int
    panelCount: int
    gutter: float
    safeArea: float
    resolutionTier: PageTemplateResolutionTier
    status: CatalogStatus
    isDefault: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class PageTemplateListResponse(BaseModel):
    data: List[PageTemplate]
    total: int
    page: int
    pageSize: int

class PageTemplateOptionsResponse(BaseModel):
    types: List[OptionItem]
    orientations: List[OptionItem]
    layouts: List[OptionItem]
    resolutionTiers: List[OptionItem]
    aspectRatios: List[OptionItem]
    defaultAspectRatio: str

# ===== Style Schemas =====

class VisualStyle(BaseModel):
    styleName: Optional[str] = None
    medium: Optional[str] = None
    lineart: Optional[str] = None
    coloring: Optional[str] = None
    lighting: Optional[str] = None
    anatomy: Optional[str] = None

class Safety(BaseModel):
    sfwOnly: Optional[bool] = None

class StyleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    key: Optional[str] = None
    description: Optional[str] = None
    status: Optional[CatalogStatus] = None
    isDefault: Optional[bool] = None
    previewImageUrl: Optional[str] = None
    visualStyle: Optional[VisualStyle] = None
    systemPrompt: Optional[str] = None
    promptTemplate: Optional[str] = None
    technicalTags: Optional[str] = None
    negativePrompt: Optional[str] = None
    continuityRules: Optional[str] = None
    formatGuidelines: Optional[str] = None
    interactionLanguage: Optional[str] = None
    promptLanguage: Optional[str] = None
    safety: Optional[Safety] = None

class StyleCreate(StyleUpdate):
    name: str = Field(..., min_length=1)

class Style(BaseModel):
    id: str
    name: str
    key: Optional[str] = None
    description: Optional[str] = None
    status: CatalogStatus
    isDefault: bool
    previewImageUrl: Optional[str] = None
    visualStyle: VisualStyle
    systemPrompt: Optional[str] = None
    promptTemplate: Optional[str] = None
    technicalTags: Optional[str] = None
    negativePrompt: Optional[str] = None
    continuityRules: Optional[str] = None
    formatGuidelines: Optional[str] = None
    interactionLanguage: str
    promptLanguage: str
    safety: Safety
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class StyleListResponse(BaseModel):
    data: List[Style]
    total: int
    page: int
    pageSize: int

class InlineImage(BaseModel):
    data: str
    mimeType: str

class StyleExtractRequest(BaseModel):
    source: Literal["prompt", "image"]
    prompt: Optional[str] = None
    image: Optional[InlineImage] = None

class StyleExtractResponse(BaseModel):
    style: Dict[str, Any]

class StylePreviewRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    negativePrompt: Optional[str] = None

class StylePreviewResponse(BaseModel):
    dataUrl: str

class StylePreviewPromptResponse(BaseModel):
    prompt: str
    negativePrompt: Optional[str] = None
    promptHash: Optional[str] = None
    styleKey: str

class PreviewImageUploadRequest(BaseModel):
    dataUrl: str = Field(..., min_length=1)
    styleKey: str = ""
    styleId: Optional[str] = None
    promptHash: Optional[str] = None

class PreviewImageUploadResponse(BaseModel):
    url: str

# ===== Integration Schemas =====

class StripeIntegrationUpdate(BaseModel):
    enabled: Optional[bool] = None
    secretKey: Optional[str] = None
    publishableKey: Optional[str] = None
    defaultCurrency: Optional[str] = None

class GeminiIntegrationUpdate(BaseModel):
    enabled: Optional[bool] = None
    apiKey: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0, le=2)
    maxOutputTokens: Optional[int] = Field(None, ge=1)
    safetyPreset: Optional[Literal["strict", "balanced", "relaxed"]] = None
    systemPrompt: Optional[str] = None
    streaming: Optional[bool] = None
    timeoutSec: Optional[int] = Field(None, ge=1)
    retryCount: Optional[int] = Field(None, ge=0)

class StripeIntegrationView(BaseModel):
    enabled: bool
    defaultCurrency: Optional[str] = None
    hasSecret: bool
    last4: Optional[str] = None

class GeminiIntegrationView(BaseModel):
    enabled: bool
    model: Optional[str] = None
    temperature: Optional[float] = None
    maxOutputTokens: Optional[int] = None
    safetyPreset: Optional[str] = None
    systemPrompt: Optional[str] = None
    streaming: Optional[bool] = None
    timeoutSec: Optional[int] = None
    retryCount: Optional[int] = None
    hasSecret: bool

class IntegrationsResponse(BaseModel):
    stripe: StripeIntegrationView
    gemini: GeminiIntegrationView

class StripeBalanceResponse(BaseModel):
    enabled: bool
    currency: Optional[str] = None
    available: Optional[int] = None
    pending: Optional[int] = None
    error: Optional[str] = None

# ===== Studio Settings Schemas =====

class StudioSettingsUpdate(BaseModel):
    displayName: Optional[str] = None
    email: Optional[str] = None
    studioName: Optional[str] = None
    timezone: Optional[str] = None
    creditAlertThreshold: Optional[int] = Field(None, ge=0)
    numberFormatLocale: Optional[str] = None

class StudioSettings(BaseModel):
    displayName: str
    email: str
    studioName: str
    timezone: str
    aiCredits: Optional[int] = None
    creditAlertThreshold: Optional[int] = None
    numberFormatLocale: str

class UserProfileUpdate(BaseModel):
    displayName: Optional[str] = None
    email: Optional[str] = None
    avatarUrl: Optional[str] = None

class UserProfileSettings(BaseModel):
    uid: str
    displayName: str
    email: str
    avatarUrl: Optional[str] = None

# ===== Comic Project Schemas =====

class Panel(BaseModel):
    id: str
    order: int
    prompt: str
    imageUrl: Optional[str] = None
    negativePrompt: Optional[str] = None
    caption: Optional[str] = None
    dialogue: Optional[List[str]] = None
    notes: Optional[str] = None

class Page(BaseModel):
    id: str
    pageNumber: int
    panels: List[Panel] = []
    title: Optional[str] = None
    notes: Optional[str] = None

class ComicProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    synopsis: Optional[str] = None
    status: Optional[Literal["draft", "in-progress", "completed"]] = None
    styleId: Optional[str] = None
    pages: List[Page] = []
    coverImageUrl: Optional[str] = None
    tags: Optional[List[str]] = None

class ComicProject(BaseModel):
    id: str
    title: str
    synopsis: Optional[str] = None
    status: str
    styleId: Optional[str] = None
    pages: List[Page]
    coverImageUrl: Optional[str] = None
    tags: Optional[List[str]] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
