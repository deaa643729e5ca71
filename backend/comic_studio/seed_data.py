"""
Seed the catalog with the house style and starter page templates
"""
import asyncio
from sqlalchemy import select
from .catalog import page_templates as template_drafts
from .catalog import styles as style_drafts
from .db import AsyncSessionLocal, engine
from .models import Base, ComicStyle, PageTemplate
from .services.page_templates import create_page_template
from .services.styles import create_style

STARTER_TEMPLATES = [
    {
        "name": "Vertical story page",
        "key": "vertical-story-page",
        "description": "Single full-bleed panel for vertical webtoon strips.",
        "orientation": "portrait",
        "isDefault": True,
    },
    {
        "name": "Horizontal story page",
        "key": "horizontal-story-page",
        "description": "Three stacked panels on a cinematic 16:9 page.",
        "orientation": "landscape",
        "layout": "grid",
        "rows": 3,
        "cols": 1,
    },
    {
        "name": "Square cover",
        "key": "square-cover",
        "description": "Square cover art for social previews.",
        "type": "cover",
        "orientation": "square",
    },
]

async def _exists(session, model, key: str) -> bool:
    result = await session.execute(select(model.id).where(model.key == key))
    return result.first() is not None

async def seed_styles(session):
    """Insert the house style as the default style"""
    payload = style_drafts.build_payload(style_drafts.DREAMWEAVER_PRESET)
    if await _exists(session, ComicStyle, payload["key"]):
        print(f"Style {payload['key']} already present")
        return
    style = await create_style(session, payload)
    print(f"Seeded style {style.key} ({style.id})")

async def seed_page_templates(session):
    """Insert one starter template per orientation"""
    for source in STARTER_TEMPLATES:
        draft = template_drafts.build_draft(source)
        draft = template_drafts.with_orientation(draft, draft.orientation)
        payload = template_drafts.build_payload(draft)
        if await _exists(session, PageTemplate, payload["key"]):
            print(f"Page template {payload['key']} already present")
            continue
        template = await create_page_template(session, payload)
        print(f"Seeded page template {template.key} ({template.id})")

async def main():
    """Main seed function"""
    print("Seeding database...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        await seed_styles(session)
        await seed_page_templates(session)

    await engine.dispose()
    print("Database seeding complete")

if __name__ == "__main__":
    asyncio.run(main())
