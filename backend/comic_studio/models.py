from datetime import datetime, timezone
import uuid

from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, Text, Integer, Float, Boolean, DateTime, JSON
Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PageTemplate(Base):
    __tablename__ = "page_templates"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    key = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String, nullable=False, default="story")
    orientation = Column(String, nullable=False, default="portrait")
    aspect_ratio = Column(String, nullable=False, default="9:16")
    layout = Column(String, nullable=False, default="single")
    rows = Column(Integer, nullable=False, default=1)
    cols = Column(Integer, nullable=False, default=1)
    panel_count = Column(Integer, nullable=False, default=1)
    gutter = Column(Float, nullable=False, default=16)
    safe_area = Column(Float, nullable=False, default=24)
    resolution_tier = Column(String, nullable=False, default="hd")
    status = Column(String, nullable=False, default="active", index=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, index=True)


class ComicStyle(Base):
    __tablename__ = "styles"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    key = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="active", index=True)
    is_default = Column(Boolean, nullable=False, default=False)
    preview_image_url = Column(Text, nullable=True)
    visual_style = Column(JSON, nullable=False, default=dict)
    system_prompt = Column(Text, nullable=True)
    prompt_template = Column(Text, nullable=True)
    technical_tags = Column(Text, nullable=True)
    negative_prompt = Column(Text, nullable=True)
    continuity_rules = Column(Text, nullable=True)
    format_guidelines = Column(Text, nullable=True)
    interaction_language = Column(String, nullable=False, default="Italian")
    prompt_language = Column(String, nullable=False, default="English")
    safety = Column(JSON, nullable=False, default=lambda: {"sfwOnly": True})
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, index=True)


class ComicProject(Base):
    __tablename__ = "comic_projects"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    title = Column(String, nullable=False)
    synopsis = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="draft")
    # Not a foreign key: deleting a style leaves referencing projects untouched
    style_id = Column(String, nullable=True)
    pages = Column(JSON, nullable=False, default=list)
    cover_image_url = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class IntegrationSettings(Base):
    __tablename__ = "integration_settings"
    id = Column(String, primary_key=True, default="global")
    stripe = Column(JSON, nullable=False, default=lambda: {"enabled": False})
    gemini = Column(JSON, nullable=False, default=lambda: {"enabled": False})
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class StudioSettings(Base):
    __tablename__ = "studio_settings"
    id = Column(String, primary_key=True, default="global")
    display_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    studio_name = Column(String, nullable=False)
    timezone = Column(String, nullable=False)
    ai_credits = Column(Integer, nullable=True)
    credit_alert_threshold = Column(Integer, nullable=True)
    number_format_locale = Column(String, nullable=False, default="en-US")
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class UserProfile(Base):
    __tablename__ = "user_profiles"
    id = Column(String, primary_key=True, default=_new_id)
    uid = Column(String, nullable=False, unique=True, index=True)
    display_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    avatar_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
