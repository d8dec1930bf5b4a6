"""Tests for copy configuration."""
import pydantic
import pytest
from blockcopy.config import CopyConfig
from blockcopy.errors import ValidationError


class TestDefaults:
    """Tests for default and environment values."""

    def test_defaults(self, monkeypatch):
        for name in ("BLOCKCOPY_CONTENT_TYPE", "BLOCKCOPY_LIST_FIELD", "BLOCKCOPY_MAX_DEPTH"):
            monkeypatch.delenv(name, raising=False)

        config = CopyConfig.from_env()

        assert config.content_type == "api::page.page"
        assert config.list_field == "sections"
        assert config.max_depth == 64

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("BLOCKCOPY_CONTENT_TYPE", "api::article.article")
        monkeypatch.setenv("BLOCKCOPY_LIST_FIELD", "blocks")
        monkeypatch.setenv("BLOCKCOPY_MAX_DEPTH", "12")

        config = CopyConfig.from_env()

        assert config.content_type == "api::article.article"
        assert config.list_field == "blocks"
        assert config.max_depth == 12

    @pytest.mark.parametrize("max_depth", [0, 500])
    def test_max_depth_bounds(self, max_depth):
        with pytest.raises(pydantic.ValidationError):
            CopyConfig(max_depth=max_depth)


class TestResolve:
    """Saved settings win over the environment."""

    def test_saved_settings(self, monkeypatch):
        monkeypatch.setenv("BLOCKCOPY_LIST_FIELD", "blocks")

        config = CopyConfig.resolve({"content_type": "api::landing.landing", "list_field": "zones"})

        assert config.content_type == "api::landing.landing"
        assert config.list_field == "zones"

    def test_empty_saved_values_ignored(self, monkeypatch):
        monkeypatch.setenv("BLOCKCOPY_LIST_FIELD", "blocks")

        config = CopyConfig.resolve({"list_field": "", "unknown": "x"})

        assert config.list_field == "blocks"

    def test_no_saved_settings(self, monkeypatch):
        monkeypatch.delenv("BLOCKCOPY_LIST_FIELD", raising=False)
        assert CopyConfig.resolve(None).list_field == "sections"


class TestUpdate:
    """Tests for config updates."""

    def test_update(self):
        config = CopyConfig().update("api::post.post", "body")

        assert config.content_type == "api::post.post"
        assert config.list_field == "body"

    @pytest.mark.parametrize("content_type,list_field", [("", "body"), ("api::post.post", None)])
    def test_update_requires_both(self, content_type, list_field):
        with pytest.raises(ValidationError):
            CopyConfig().update(content_type, list_field)
