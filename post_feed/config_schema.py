from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .view import ALL_TAGS, SortOrder

PositiveFloat = Annotated[float, Field(gt=0.0)]


class ViewConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    sort_order: SortOrder = SortOrder.DATE_DESC
    active_tag: str = ALL_TAGS

    @field_validator("active_tag")
    @classmethod
    def _active_tag_must_be_non_empty(cls, v: str) -> str:
        tag = (v or "").strip()
        if not tag:
            raise ValueError("must be a non-empty tag or 'all'")
        return tag


class FetchConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_seconds: PositiveFloat = 10.0
    user_agent: str = "post_feed/0.1"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    data_file: str = Field("posts.xml", alias="dataFile")
    tag_order: Literal["first_seen", "lexical"] = "first_seen"
    view: ViewConfig = Field(default_factory=ViewConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    @field_validator("data_file")
    @classmethod
    def _data_file_must_be_non_empty(cls, v: str) -> str:
        path = (v or "").strip()
        if not path:
            raise ValueError("must be a non-empty path or URL")
        return path
