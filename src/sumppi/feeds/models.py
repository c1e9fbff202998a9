"""Data models for podcast series and episodes as served by the series API.

The API envelope is ``{"data": <series>}``. Only a handful of fields feed
the RSS transform; the rest are decoded so nothing is silently lost, and
pass through unused.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class APIModel(BaseModel):
    """Base for API payload models.

    Unknown keys are ignored and an explicit ``null`` in a field that has a
    default is treated as if the key were missing, so upstream omissions
    degrade to empty values instead of failing the whole series.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if value is not None or _is_optional(cls, key)
            }
        return data


def _is_optional(model: type[BaseModel], key: str) -> bool:
    field = model.model_fields.get(key)
    return field is not None and field.default is None


class AudioSample(APIModel):
    """Short preview clip of an episode."""

    audio_url: str = ""
    audio_duration: int = Field(default=0, ge=0)
    audio_length: int = Field(default=0, ge=0)


class AudioSlice(APIModel):
    """A chapter-like slice of the episode audio."""

    url: str = ""
    start: int = 0
    end: int = 0


class AvailabilityPeriod(APIModel):
    """Window in which an episode is available for a product."""

    product: str | None = None
    type: str = ""
    start_date: str = ""
    end_date: str = ""


class Rankings(APIModel):
    """Popularity rankings."""

    daily: int = 0
    weekly: int = 0
    monthly: int = 0


class Episode(APIModel):
    """Represents a single podcast episode."""

    title: str = ""
    description: str = ""
    guid: str = ""
    publication_date: str = ""  # RFC 3339, may be malformed
    audio_url: str = ""
    audio_length: int = Field(default=0, ge=0, description="Audio size in bytes")
    audio_duration: int = Field(default=0, ge=0, description="Audio duration in seconds")

    # Pass-through fields
    source_type: str = ""
    series_title: str = ""
    series_guid: str = ""
    author: str = ""
    photo_author: str = ""
    original_article_url: str = ""
    html_description: str | None = None
    rss_guid: str = ""
    audio_sample: AudioSample = Field(default_factory=AudioSample)
    audio_pkgs: dict[str, str] = Field(default_factory=dict)
    last_modified: str = ""
    audio_slices: list[AudioSlice] = Field(default_factory=list)
    series_tags: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    availability_periods: list[AvailabilityPeriod] = Field(default_factory=list)
    rankings: Rankings = Field(default_factory=Rankings)
    analytics_data: str | None = None
    ad_tags: str | None = None
    cover_url: str = ""
    square_cover_url: str | None = None
    square_photo_author: str | None = None
    h: str | None = None
    kind: str = ""


class SeriesData(APIModel):
    """A podcast series with its episodes, in source order."""

    guid: str = Field(..., min_length=1)
    title: str = ""
    author: str = ""
    description: str = ""
    cover_url: str = ""
    publication_date: str = ""
    copyright: str = ""
    link: str = ""
    episodes: list[Episode] = Field(default_factory=list)

    # Pass-through fields
    last_modified: str = ""
    rss_feed_url: str = ""
    html_description: str | None = None
    publisher: str = ""
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    rankings: Rankings = Field(default_factory=Rankings)


class SeriesResponse(APIModel):
    """The ``{"data": ...}`` envelope returned by the series endpoint."""

    data: SeriesData
