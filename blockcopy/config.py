"""
Copy configuration.

The content type and list field are late-bound: they come from saved
settings, the environment, or the defaults below, in that order. The
resolved ``CopyConfig`` is handed to ``ComponentCopyService`` explicitly.
"""

from __future__ import annotations
import logging
import os
from typing import Any

from pydantic import BaseModel, Field

from .errors import ValidationError


logger = logging.getLogger(__name__)


DEFAULT_CONTENT_TYPE = "api::page.page"
DEFAULT_LIST_FIELD = "sections"
DEFAULT_MAX_DEPTH = 64
# analysis recurses per level, so the bound stays far below the recursion limit
MAX_DEPTH_LIMIT = 200


class CopyConfig(BaseModel):
    content_type: str = Field(default=DEFAULT_CONTENT_TYPE, description="Record type holding the component list")
    list_field: str = Field(default=DEFAULT_LIST_FIELD, description="Name of the ordered component list field")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT, description="Deepest component tree accepted for copy")

    @classmethod
    def from_env(cls) -> "CopyConfig":
        return cls(
            content_type=os.environ.get("BLOCKCOPY_CONTENT_TYPE", DEFAULT_CONTENT_TYPE),
            list_field=os.environ.get("BLOCKCOPY_LIST_FIELD", DEFAULT_LIST_FIELD),
            max_depth=int(os.environ.get("BLOCKCOPY_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
        )

    @classmethod
    def resolve(cls, saved: dict[str, Any] | None = None) -> "CopyConfig":
        """
        Build the effective config.

        Priority: saved settings, then environment, then defaults. Empty
        saved values are ignored.
        """
        config = cls.from_env()
        if not saved:
            return config
        overrides = {k: v for k, v in saved.items() if k in cls.model_fields and v}
        if overrides:
            logger.info(f"Loaded saved copy settings: {overrides}")
            config = config.model_copy(update=overrides)
        return config

    def update(self, content_type: str | None, list_field: str | None) -> "CopyConfig":
        if not content_type or not list_field:
            raise ValidationError("content_type and list_field are required")
        return self.model_copy(update={"content_type": content_type, "list_field": list_field})
