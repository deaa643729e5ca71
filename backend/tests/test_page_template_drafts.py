from comic_studio.catalog import page_templates as drafts
from comic_studio.catalog.common import slugify


def test_build_draft_fills_defaults_from_empty_source():
    draft = drafts.build_draft(None)

    assert draft.name == ""
    assert draft.type == "story"
    assert draft.orientation == "portrait"
    assert draft.aspectRatio == "9:16"
    assert draft.layout == "single"
    assert (draft.rows, draft.cols, draft.panelCount) == (1, 1, 1)
    assert draft.gutter == 16
    assert draft.safeArea == 24
    assert draft.resolutionTier == "hd"
    assert draft.status == "active"
    assert draft.isDefault is False


def test_build_draft_keeps_provided_falsy_values():
    draft = drafts.build_draft({"name": "", "panelCount": 0, "gutter": 0, "isDefault": False})

    assert draft.name == ""
    assert draft.panelCount == 0
    assert draft.gutter == 0


def test_build_draft_never_validates_bad_values():
    draft = drafts.build_draft({"rows": -3, "layout": "grid", "aspectRatio": ""})

    assert draft.rows == -3
    assert draft.aspectRatio == ""


def test_grid_layout_derives_panel_count():
    draft = drafts.build_draft({"name": "Grid", "layout": "grid", "rows": 3, "cols": 2, "panelCount": 1})

    assert drafts.build_payload(draft)["panelCount"] == 6


def test_custom_layout_keeps_explicit_panel_count():
    draft = drafts.build_draft({"name": "Custom", "layout": "custom", "rows": 2, "cols": 2, "panelCount": 5})

    assert drafts.build_payload(draft)["panelCount"] == 5


def test_payload_trims_and_drops_empty_strings():
    draft = drafts.build_draft({"name": "  Cover  ", "key": "   ", "description": " Front cover "})
    payload = drafts.build_payload(draft)

    assert payload["name"] == "Cover"
    assert "key" not in payload
    assert payload["description"] == "Front cover"


def test_payload_keeps_empty_name():
    payload = drafts.build_payload(drafts.build_draft({"name": "   "}))

    assert payload["name"] == ""


def test_payload_clamps_numbers():
    draft = drafts.build_draft({"name": "Clamp", "rows": 0, "cols": -2, "panelCount": 0, "gutter": -5, "safeArea": -1})
    payload = drafts.build_payload(draft)

    assert payload["rows"] == 1
    assert payload["cols"] == 1
    assert payload["panelCount"] == 1
    assert payload["gutter"] == 0
    assert payload["safeArea"] == 0


def test_payload_falls_back_on_blank_aspect_ratio():
    payload = drafts.build_payload(drafts.build_draft({"name": "Ratio", "aspectRatio": "  "}))

    assert payload["aspectRatio"] == "9:16"


def test_payload_round_trip_is_stable():
    draft = drafts.build_draft({
        "name": " Story page ",
        "key": "story-page ",
        "layout": "grid",
        "rows": 2,
        "cols": 3,
        "orientation": "landscape",
        "aspectRatio": "16:9",
    })
    payload = drafts.build_payload(draft)

    assert drafts.build_payload(drafts.build_draft(payload)) == payload


def test_validation_reports_missing_required_fields():
    draft = drafts.build_draft({"name": "", "key": "", "aspectRatio": "", "panelCount": 0})
    validation = drafts.validate_draft(draft)

    assert validation.valid is False
    assert set(validation.missing) == {"name", "key", "aspectRatio", "panelCount"}


def test_validation_checks_rows_and_cols_only_for_multi_panel_layouts():
    single = drafts.build_draft({"name": "A", "key": "a", "rows": 0, "cols": 0})
    grid = drafts.build_draft({"name": "A", "key": "a", "layout": "grid", "rows": 0, "cols": 0})

    assert drafts.validate_draft(single).valid is True
    assert drafts.validate_draft(grid).missing == ["rows", "cols"]


def test_missing_labels_are_human_readable():
    assert drafts.missing_labels(["name", "panelCount", "unknown"]) == ["Template name", "Panel count", "unknown"]


def test_aspect_ratio_presets_by_orientation():
    assert [v for v, _ in drafts.aspect_ratio_options("portrait")] == ["9:16", "3:4", "2:3"]
    assert [v for v, _ in drafts.aspect_ratio_options("landscape")] == ["16:9", "4:3", "3:2"]
    assert [v for v, _ in drafts.aspect_ratio_options("square")] == ["1:1"]
    assert drafts.default_aspect_ratio("landscape") == "16:9"
    assert drafts.default_aspect_ratio(None) == "9:16"


def test_with_orientation_resets_unavailable_aspect_ratio():
    draft = drafts.build_draft({"aspectRatio": "3:4"})

    assert drafts.with_orientation(draft, "landscape").aspectRatio == "16:9"
    assert drafts.with_orientation(draft, "portrait").aspectRatio == "3:4"


def test_slugify():
    assert slugify(" Cover Verticale 16:9 ") == "cover-verticale-169"
    assert slugify("Hello   World") == "hello-world"
    assert slugify("a -- b") == "a-b"
    assert slugify("Ünïcode!") == "ncode"


def test_suggest_key_prefers_explicit_key():
    assert drafts.suggest_key(drafts.build_draft({"name": "My Page", "key": " custom "})) == "custom"
    assert drafts.suggest_key(drafts.build_draft({"name": "My Page"})) == "my-page"
