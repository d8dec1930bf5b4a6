"""Tests for component sanitizing."""
import copy

import pytest
from blockcopy.block import MEDIA_WHITELIST, REMOVED_FIELDS, find_forbidden, sanitize, sanitize_node


def make_hero():
    return {
        "__component": "sections.hero",
        "id": 7,
        "documentId": "doc-7",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
        "publishedAt": None,
        "locale": "en",
        "title": "Welcome",
        "subtitle": None,
        "visible": True,
        "image": {
            "id": 3,
            "name": "hero.png",
            "mime": "image/png",
            "url": "/uploads/hero.png",
            "formats": {"thumbnail": {"url": "/uploads/thumb_hero.png"}},
            "createdAt": "2024-01-01T00:00:00Z",
            "related": [{"id": 1}],
        },
        "buttons": [
            {"id": 11, "label": "Start", "href": "/start"},
            {"id": 12, "label": "Docs", "href": "/docs"},
        ],
        "cards": [
            {
                "__component": "shared.card",
                "id": 21,
                "heading": "Fast",
                "icon": {"id": 4, "hash": "icon_abc", "name": "bolt.svg", "updatedBy": {"id": 1}},
            },
        ],
        "seo": {"id": 31, "metaTitle": "Home", "createdBy": {"id": 1, "firstname": "Ada"}},
        "tags": ["a", "b"],
    }


class TestRemovedFields:
    """Tests for system field removal."""

    def test_root_system_fields_removed(self):
        clean = sanitize(make_hero())

        for name in REMOVED_FIELDS:
            assert name not in clean

    def test_tag_preserved(self):
        clean = sanitize(make_hero())
        assert clean["__component"] == "sections.hero"

    def test_nested_objects_cleaned(self):
        clean = sanitize(make_hero())

        assert clean["seo"] == {"metaTitle": "Home"}
        assert clean["buttons"] == [
            {"label": "Start", "href": "/start"},
            {"label": "Docs", "href": "/docs"},
        ]

    def test_nested_components_cleaned(self):
        clean = sanitize(make_hero())

        card = clean["cards"][0]
        assert card["__component"] == "shared.card"
        assert "id" not in card
        assert card["heading"] == "Fast"

    def test_no_forbidden_keys_anywhere(self):
        assert find_forbidden(make_hero()) != []
        assert find_forbidden(sanitize(make_hero())) == []

    def test_null_values_kept(self):
        clean = sanitize(make_hero())
        assert "subtitle" in clean and clean["subtitle"] is None


class TestMediaNarrowing:
    """Tests for media whitelist narrowing."""

    def test_media_keeps_identity(self):
        clean = sanitize(make_hero())
        assert clean["image"]["id"] == 3

    def test_media_drops_non_whitelisted(self):
        image = sanitize(make_hero())["image"]

        assert set(image) == {"id", "name", "mime", "url", "formats"}
        assert set(image) <= set(MEDIA_WHITELIST)

    def test_media_in_array(self):
        gallery = {
            "__component": "sections.gallery",
            "photos": [
                {"id": 1, "url": "/a.png", "extra": 1},
                {"id": 2, "url": "/b.png", "createdBy": {"id": 9}},
            ],
        }

        clean = sanitize(gallery)

        assert clean["photos"] == [{"id": 1, "url": "/a.png"}, {"id": 2, "url": "/b.png"}]

    def test_media_detected_by_hash_and_name(self):
        icon = sanitize(make_hero())["cards"][0]["icon"]
        assert icon == {"id": 4, "hash": "icon_abc", "name": "bolt.svg"}

    def test_component_with_url_is_not_narrowed(self):
        link = {"__component": "shared.link", "id": 5, "url": "/x", "target": "_blank"}

        clean = sanitize(link)

        assert clean == {"__component": "shared.link", "url": "/x", "target": "_blank"}


class TestPurity:
    """Tests that sanitizing never mutates and always copies."""

    def test_input_not_mutated(self):
        hero = make_hero()
        before = copy.deepcopy(hero)

        sanitize(hero)

        assert hero == before

    def test_output_shares_no_containers(self):
        hero = make_hero()
        clean = sanitize(hero)

        assert clean["tags"] is not hero["tags"]
        assert clean["image"]["formats"] is not hero["image"]["formats"]
        clean["image"]["formats"]["thumbnail"]["url"] = "/changed"
        assert hero["image"]["formats"]["thumbnail"]["url"] == "/uploads/thumb_hero.png"

    def test_idempotent(self):
        once = sanitize(make_hero())
        assert sanitize(once) == once


class TestEdgeCases:
    """Tests for unusual shapes."""

    @pytest.mark.parametrize("value", [None, "text", 3, [1, 2]])
    def test_non_object_top_level_returned_unchanged(self, value):
        assert sanitize(value) is value

    def test_nested_arrays(self):
        table = {"__component": "sections.table", "rows": [[{"id": 1, "v": "a"}], [{"id": 2, "v": "b"}]]}

        clean = sanitize(table)

        assert clean["rows"] == [[{"v": "a"}], [{"v": "b"}]]

    def test_scalar_array_elements(self):
        assert sanitize_node([1, "a", None, {"id": 1, "x": 2}]) == [1, "a", None, {"x": 2}]

    def test_underscore_keys_kept(self):
        assert sanitize({"__component": "a", "_meta": 1}) == {"__component": "a", "_meta": 1}


class TestDeepTrees:
    """Sanitizing does not depend on the interpreter recursion limit."""

    def test_deeply_nested_component(self):
        depth = 3000
        component = {"__component": "a", "id": 0}
        current = component
        for level in range(1, depth):
            current["child"] = {"id": level, "createdAt": "x", "level": level}
            current = current["child"]

        clean = sanitize(component)

        node = clean
        seen = 0
        while node is not None:
            assert "id" not in node
            assert "createdAt" not in node
            seen += 1
            node = node.get("child")
        assert seen == depth

    def test_deeply_nested_arrays(self):
        tree = {"__component": "a", "rows": []}
        current = tree["rows"]
        for _ in range(3000):
            inner = []
            current.append({"id": 1, "items": inner})
            current = inner

        clean = sanitize(tree)

        rows = clean["rows"]
        levels = 0
        while rows:
            assert rows[0].keys() == {"items"}
            rows = rows[0]["items"]
            levels += 1
        assert levels == 3000
