from comic_studio import seed_data
from comic_studio.services import page_templates, styles


async def test_seed_is_idempotent(db):
    await seed_data.seed_styles(db)
    await seed_data.seed_page_templates(db)
    await seed_data.seed_styles(db)
    await seed_data.seed_page_templates(db)

    style_page = await styles.list_styles(db)
    template_page = await page_templates.list_page_templates(db)

    assert style_page.total == 1
    assert style_page.data[0].key == "dreamweaver-style"
    assert style_page.data[0].is_default is True
    assert template_page.total == len(seed_data.STARTER_TEMPLATES)
    assert [t.key for t in template_page.data if t.is_default] == ["vertical-story-page"]


async def test_seeded_templates_match_their_orientation(db):
    await seed_data.seed_page_templates(db)

    rows = (await page_templates.list_page_templates(db)).data
    ratios = {row.key: (row.orientation, row.aspect_ratio, row.panel_count) for row in rows}

    assert ratios["vertical-story-page"] == ("portrait", "9:16", 1)
    assert ratios["horizontal-story-page"] == ("landscape", "16:9", 3)
    assert ratios["square-cover"] == ("square", "1:1", 1)
