"""Data models for generated privacy news."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ModelOutput(BaseModel):
    # Field names follow the camelCase JSON the model is asked to return.
    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, extra="ignore"
    )


class Article(_ModelOutput):
    """One generated news item."""

    id: Optional[int] = Field(None, description="Ordinal; requested by the live view only.")
    category: str = Field("", description="california, minors, breaches or bigtech.")
    tag: str = ""
    tag_color: str = Field("purple", alias="tagColor")
    headline: str = ""
    summary: str = ""
    date: str = Field("", description="Free-form date or timeframe; never parsed.")
    source_label: Optional[str] = Field(None, alias="sourceLabel")
    source_url: Optional[str] = Field(None, alias="sourceUrl")

    @field_validator("id", mode="before")
    @classmethod
    def _whole_number_or_none(cls, value):
        # Ids are informational; anything that is not a whole number becomes None.
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdecimal():
            return int(value)
        return None


class Debate(_ModelOutput):
    """One ongoing policy debate."""

    num: str = ""
    border_color: Optional[str] = Field(
        None,
        alias="borderColor",
        description="Requested by the static prompt; accents are positional when rendered.",
    )
    title: str = ""
    summary: str = ""


class NewsPayload(BaseModel):
    """Both collections parsed from a single model response."""

    articles: List[Article] = Field(default_factory=list)
    debates: List[Debate] = Field(default_factory=list)
