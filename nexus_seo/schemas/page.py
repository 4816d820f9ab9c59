"""
Extraction contract: the raw signals pulled out of one page load.
"""
from pydantic import ConfigDict, Field, field_validator, model_validator

from nexus_seo.schemas.common import FrozenSchema


class ExtractedPageData(FrozenSchema):
    """Raw page signals.

    Produced by either extractor and validated at the boundary: unknown keys,
    negative counts and inconsistent sub-counts are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    description: str = ""
    h1s: list[str] = Field(default_factory=list)
    img_count: int = Field(default=0, ge=0)
    missing_alt_count: int = Field(default=0, ge=0)
    link_count: int = Field(default=0, ge=0)
    internal_link_count: int = Field(default=0, ge=0)
    word_count: int = Field(default=0, ge=0)
    load_time: int = Field(default=0, ge=0, description="Load time in milliseconds")

    @field_validator("h1s")
    @classmethod
    def _strip_headings(cls, value: list[str]) -> list[str]:
        return [h.strip() for h in value if h and h.strip()]

    @model_validator(mode="after")
    def _check_sub_counts(self) -> "ExtractedPageData":
        if self.missing_alt_count > self.img_count:
            raise ValueError("missingAltCount exceeds imgCount")
        if self.internal_link_count > self.link_count:
            raise ValueError("internalLinkCount exceeds linkCount")
        return self
