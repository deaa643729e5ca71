"""
API tests for the page template and style catalogs
"""
import pytest

from comic_studio.auth import create_access_token


async def test_health_check(anon_client):
    response = await anon_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_root_is_public(anon_client):
    response = await anon_client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_unknown_route_uses_error_envelope(anon_client):
    response = await anon_client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json() == {"error": "NOT_FOUND", "message": "Not Found", "status_code": 404}


@pytest.mark.parametrize("path", ["/page-templates", "/styles", "/integrations", "/settings/general", "/projects"])
async def test_requires_bearer_token(anon_client, path):
    response = await anon_client.get(path)
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHORIZED"


async def test_rejects_invalid_token(anon_client):
    response = await anon_client.get("/styles", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHORIZED"


async def test_rejects_expired_token(anon_client):
    token = create_access_token("user-123", expires_minutes=-5)
    response = await anon_client.get("/styles", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_unauthorized_write_does_not_persist(anon_client, client):
    response = await anon_client.post("/page-templates", json={"name": "Sneaky"})
    assert response.status_code == 401

    listing = await client.get("/page-templates")
    assert listing.json()["total"] == 0


async def test_page_template_crud(client):
    response = await client.post("/page-templates", json={"name": "Story page", "key": "story-page"})
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Story page"
    assert created["layout"] == "single"
    assert created["aspectRatio"] == "9:16"
    assert created["isDefault"] is False

    template_id = created["id"]
    response = await client.get(f"/page-templates/{template_id}")
    assert response.status_code == 200
    assert response.json()["key"] == "story-page"

    response = await client.put(f"/page-templates/{template_id}", json={"layout": "grid", "rows": 2})
    assert response.status_code == 200
    updated = response.json()
    assert updated["layout"] == "grid"
    assert updated["rows"] == 2
    assert updated["name"] == "Story page"

    response = await client.delete(f"/page-templates/{template_id}")
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    response = await client.get(f"/page-templates/{template_id}")
    assert response.status_code == 404
    assert response.json()["error"] == "PAGE_TEMPLATE_NOT_FOUND"


async def test_delete_unknown_returns_404(client):
    response = await client.delete("/styles/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"] == "STYLE_NOT_FOUND"


async def test_update_unknown_returns_404(client):
    response = await client.put("/page-templates/does-not-exist", json={"name": "X"})
    assert response.status_code == 404


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"name": ""},
        {"name": "Bad rows", "rows": 0},
        {"name": "Bad gutter", "gutter": -1},
        {"name": "Bad layout", "layout": "mosaic"},
        {"name": "Bad status", "status": "deleted"},
    ],
)
async def test_create_page_template_rejects_invalid_body(client, body):
    response = await client.post("/page-templates", json=body)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "INVALID_REQUEST"
    assert data["details"]


@pytest.mark.parametrize("path", ["/page-templates", "/page-templates/drafts/payload"])
@pytest.mark.parametrize("raw", ['{"name": "A", "gutter": Infinity}', '{"name": "A", "safeArea": NaN}'])
async def test_non_finite_spacing_is_rejected(client, path, raw):
    response = await client.post(path, content=raw, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_REQUEST"

    listing = await client.get("/page-templates")
    assert listing.json()["total"] == 0


async def test_unknown_fields_are_ignored(client):
    response = await client.post("/styles", json={"name": "Ink", "mood": "grim"})
    assert response.status_code == 201
    assert "mood" not in response.json()


async def test_style_create_defaults(client):
    response = await client.post("/styles", json={"name": "Ink", "visualStyle": {"medium": "Ink"}})
    assert response.status_code == 201
    style = response.json()
    assert style["visualStyle"]["medium"] == "Ink"
    assert style["safety"] == {"sfwOnly": True}
    assert style["interactionLanguage"] == "Italian"
    assert style["promptLanguage"] == "English"


async def test_style_update_merges_visual_style(client):
    created = (await client.post("/styles", json={"name": "Ink", "visualStyle": {"medium": "Ink", "lighting": "Flat"}})).json()

    response = await client.put(f"/styles/{created['id']}", json={"visualStyle": {"lighting": "Moody"}})
    assert response.status_code == 200
    assert response.json()["visualStyle"]["medium"] == "Ink"
    assert response.json()["visualStyle"]["lighting"] == "Moody"


async def test_only_one_default_style(client):
    first = (await client.post("/styles", json={"name": "First", "isDefault": True})).json()
    second = (await client.post("/styles", json={"name": "Second", "isDefault": True})).json()

    listing = (await client.get("/styles")).json()
    defaults = [item["id"] for item in listing["data"] if item["isDefault"]]
    assert defaults == [second["id"]]

    await client.put(f"/styles/{first['id']}", json={"isDefault": True})
    listing = (await client.get("/styles")).json()
    defaults = [item["id"] for item in listing["data"] if item["isDefault"]]
    assert defaults == [first["id"]]


async def test_list_query_is_clamped(client):
    for i in range(3):
        await client.post("/page-templates", json={"name": f"Template {i}"})

    response = await client.get("/page-templates", params={"page": "0", "pageSize": "1000"})
    data = response.json()
    assert data["page"] == 1
    assert data["pageSize"] == 50
    assert data["total"] == 3
    assert len(data["data"]) == 3


async def test_list_ignores_unparsable_query_values(client):
    await client.post("/styles", json={"name": "Neon"})

    response = await client.get("/styles", params={"page": "abc", "pageSize": "", "status": "bogus"})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["pageSize"] == 10
    assert data["total"] == 1


async def test_list_with_huge_page_returns_empty_page(client):
    await client.post("/page-templates", json={"name": "Only"})

    response = await client.get("/page-templates", params={"page": "99999999999999999999"})
    assert response.status_code == 200
    data = response.json()
    assert data["data"] == []
    assert data["total"] == 1


async def test_list_search_and_status(client):
    neon = (await client.post("/styles", json={"name": "Neon", "status": "active"})).json()
    await client.post("/styles", json={"name": "Glass", "status": "archived"})

    active = (await client.get("/styles", params={"q": "Neon", "status": "active"})).json()
    assert [item["id"] for item in active["data"]] == [neon["id"]]

    archived = (await client.get("/styles", params={"q": "Neon", "status": "archived"})).json()
    assert archived["data"] == []
    assert archived["total"] == 0


async def test_page_template_draft_validation(client):
    response = await client.post(
        "/page-templates/drafts/validate",
        json={"name": "", "key": "", "aspectRatio": "", "panelCount": 0},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert set(data["missing"]) == {"name", "key", "aspectRatio", "panelCount"}
    assert "Template name" in data["labels"]


async def test_page_template_draft_payload(client):
    response = await client.post(
        "/page-templates/drafts/payload",
        json={"name": " Grid page ", "layout": "grid", "rows": 3, "cols": 2, "panelCount": 1},
    )
    data = response.json()
    assert data["payload"]["panelCount"] == 6
    assert data["payload"]["name"] == "Grid page"
    assert data["suggestedKey"] == "grid-page"
    assert data["missing"] == ["key"]


async def test_style_draft_validation_with_empty_body(client):
    response = await client.post("/styles/drafts/validate")
    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert data["missing"][0] == "name"


async def test_style_preview_prompt(client):
    response = await client.post(
        "/styles/drafts/preview-prompt",
        json={"name": "Neon Nights", "visualStyle": {"medium": "Digital"}, "negativePrompt": " blurry "},
    )
    data = response.json()
    assert data["prompt"] == "Style name: Neon Nights.\nMedium: Digital."
    assert data["negativePrompt"] == "blurry"
    assert len(data["promptHash"]) == 64
    assert data["styleKey"] == "neon-nights"


async def test_style_preview_prompt_key_is_folder_safe(client):
    response = await client.post("/styles/drafts/preview-prompt", json={"name": "Neon", "key": "My Key/v2"})
    assert response.status_code == 200
    assert response.json()["styleKey"] == "my-keyv2"


async def test_page_template_options(client):
    response = await client.get("/page-templates/options", params={"orientation": "landscape"})
    data = response.json()
    assert [item["value"] for item in data["aspectRatios"]] == ["16:9", "4:3", "3:2"]
    assert data["defaultAspectRatio"] == "16:9"
    assert [item["value"] for item in data["layouts"]] == ["single", "grid", "custom"]
