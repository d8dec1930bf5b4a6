"""Tests for node classification."""
import pytest
from blockcopy.block import NodeKind, classify, exceeds_depth, is_component, is_media, json_type, node_depth


class TestScalars:
    """Tests for scalar values."""

    @pytest.mark.parametrize("value", ["text", 1, 2.5, True, False, None, ""])
    def test_scalars(self, value):
        assert classify(value) is NodeKind.SCALAR


class TestComponents:
    """Tests for tagged components."""

    def test_tagged_object_is_component(self):
        assert classify({"__component": "sections.hero", "title": "Hi"}) is NodeKind.COMPONENT

    def test_tag_dominates_media_shape(self):
        node = {"__component": "sections.link", "url": "/about", "mime": "text/html"}

        assert classify(node) is NodeKind.COMPONENT
        assert not is_media(node)

    def test_empty_tag_is_still_component(self):
        assert is_component({"__component": None})


class TestMedia:
    """Tests for media-asset detection."""

    @pytest.mark.parametrize("marker", ["mime", "url", "formats", "provider"])
    def test_single_marker(self, marker):
        assert classify({marker: "x"}) is NodeKind.MEDIA

    def test_marker_with_null_value(self):
        assert is_media({"id": 1, "url": None})

    def test_identity_hash_and_name(self):
        assert is_media({"id": 1, "hash": "abc", "name": "photo.png"})
        assert is_media({"id": 1, "hash": "abc", "alternativeText": "A photo"})

    def test_identity_and_hash_alone_is_not_media(self):
        assert classify({"id": 1, "hash": "abc"}) is NodeKind.PLAIN_OBJECT

    def test_name_without_hash_is_not_media(self):
        assert classify({"id": 1, "name": "Button"}) is NodeKind.PLAIN_OBJECT


class TestContainers:
    """Tests for arrays and plain objects."""

    def test_array(self):
        assert classify([]) is NodeKind.ARRAY
        assert classify([{"__component": "a"}]) is NodeKind.ARRAY

    def test_plain_object(self):
        assert classify({}) is NodeKind.PLAIN_OBJECT
        assert classify({"label": "Go", "href": "/go"}) is NodeKind.PLAIN_OBJECT


class TestHelpers:
    """Tests for json_type and node_depth."""

    def test_json_type(self):
        assert json_type("a") == "string"
        assert json_type(3) == "number"
        assert json_type(3.5) == "number"
        assert json_type(True) == "boolean"
        assert json_type(None) == "null"
        assert json_type([1]) == "array"
        assert json_type({"a": 1}) == "object"

    def test_node_depth(self):
        assert node_depth("x") == 0
        assert node_depth({}) == 1
        assert node_depth({"a": {"b": [1, 2]}}) == 3

    def test_node_depth_handles_deep_nesting(self):
        node = {}
        current = node
        for _ in range(5000):
            current["child"] = {}
            current = current["child"]

        assert node_depth(node) == 5001

    def test_exceeds_depth(self):
        node = {"a": {"b": [1, 2]}}

        assert exceeds_depth(node, 2)
        assert not exceeds_depth(node, 3)
        assert not exceeds_depth("x", 0)

    def test_exceeds_depth_stops_on_deep_nesting(self):
        node = {}
        current = node
        for _ in range(5000):
            current["child"] = {}
            current = current["child"]

        assert exceeds_depth(node, 64)
        assert not exceeds_depth(node, 5001)
