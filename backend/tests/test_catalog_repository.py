from comic_studio.services import catalog
from comic_studio.services import page_templates, styles


async def test_create_assigns_id_and_defaults(db):
    row = await page_templates.create_page_template(db, {"name": "Story"})

    assert row.id
    assert row.layout == "single"
    assert row.aspect_ratio == "9:16"
    assert row.is_default is False
    assert row.created_at is not None
    assert row.updated_at is not None


async def test_default_singleton_on_create(db):
    first = await styles.create_style(db, {"name": "First", "isDefault": True})
    second = await styles.create_style(db, {"name": "Second", "isDefault": True})

    result = await styles.list_styles(db)
    defaults = [row.id for row in result.data if row.is_default]

    assert defaults == [second.id]
    assert first.id != second.id


async def test_default_singleton_on_update(db):
    a = await page_templates.create_page_template(db, {"name": "A"})
    b = await page_templates.create_page_template(db, {"name": "B", "isDefault": True})

    await page_templates.update_page_template(db, a.id, {"isDefault": True})

    result = await page_templates.list_page_templates(db)
    assert [row.id for row in result.data if row.is_default] == [a.id]
    refreshed_b = await page_templates.get_page_template(db, b.id)
    assert refreshed_b.is_default is False


async def test_pagination_is_clamped(db):
    for i in range(3):
        await page_templates.create_page_template(db, {"name": f"T{i}"})

    result = await page_templates.list_page_templates(db, page=0, page_size=1000)

    assert result.page == 1
    assert result.page_size == catalog.MAX_PAGE_SIZE
    assert result.total == 3

    second_page = await page_templates.list_page_templates(db, page=2, page_size=2)
    assert len(second_page.data) == 1
    assert second_page.total == 3


def test_default_page_size():
    assert catalog.clamp_page_size(None) == 10
    assert catalog.clamp_page_size(0) == 1
    assert catalog.clamp_page(-4) == 1
    assert catalog.clamp_page(10**20) == catalog.MAX_PAGE


async def test_far_page_is_empty(db):
    await page_templates.create_page_template(db, {"name": "Only"})

    result = await page_templates.list_page_templates(db, page=10**20, page_size=catalog.MAX_PAGE_SIZE)

    assert result.data == []
    assert result.total == 1


async def test_list_orders_most_recently_updated_first(db):
    old = await page_templates.create_page_template(db, {"name": "Old"})
    new = await page_templates.create_page_template(db, {"name": "New"})

    result = await page_templates.list_page_templates(db)
    assert [row.id for row in result.data] == [new.id, old.id]

    await page_templates.update_page_template(db, old.id, {"description": "touched"})
    result = await page_templates.list_page_templates(db)
    assert [row.id for row in result.data] == [old.id, new.id]


async def test_search_respects_status(db):
    neon = await styles.create_style(db, {"name": "Neon", "status": "active"})
    await styles.create_style(db, {"name": "Glass", "status": "archived"})

    active = await styles.list_styles(db, search="Neon", status="active")
    archived = await styles.list_styles(db, search="Neon", status="archived")

    assert [row.id for row in active.data] == [neon.id]
    assert active.total == 1
    assert archived.data == []
    assert archived.total == 0


async def test_search_is_case_insensitive_over_name_key_and_description(db):
    by_name = await styles.create_style(db, {"name": "Watercolor Dreams"})
    by_key = await styles.create_style(db, {"name": "Other", "key": "soft-watercolor"})
    by_description = await styles.create_style(db, {"name": "Third", "description": "Loose WATERCOLOR washes"})
    await styles.create_style(db, {"name": "Unrelated"})

    result = await styles.list_styles(db, search="watercolor")

    assert {row.id for row in result.data} == {by_name.id, by_key.id, by_description.id}


async def test_search_treats_wildcards_literally(db):
    await page_templates.create_page_template(db, {"name": "100% bleed"})
    await page_templates.create_page_template(db, {"name": "Full bleed"})

    result = await page_templates.list_page_templates(db, search="%")

    assert [row.name for row in result.data] == ["100% bleed"]


async def test_update_merges_nested_objects(db):
    row = await styles.create_style(db, {"name": "Ink", "visualStyle": {"medium": "Ink", "lineart": "Bold"}})

    updated = await styles.update_style(db, row.id, {"visualStyle": {"lineart": "Thin"}, "safety": {"sfwOnly": False}})

    assert updated.visual_style == {"medium": "Ink", "lineart": "Thin"}
    assert updated.safety == {"sfwOnly": False}


async def test_create_style_applies_safety_default(db):
    row = await styles.create_style(db, {"name": "Safe"})

    assert row.safety == {"sfwOnly": True}
    assert row.visual_style == {}
    assert row.interaction_language == "Italian"


async def test_update_unknown_id_returns_none(db):
    assert await styles.update_style(db, "missing", {"name": "X"}) is None


async def test_delete(db):
    row = await page_templates.create_page_template(db, {"name": "Gone"})

    assert await page_templates.delete_page_template(db, row.id) is True
    assert await page_templates.get_page_template(db, row.id) is None
    assert await page_templates.delete_page_template(db, row.id) is False
