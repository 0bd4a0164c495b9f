from datetime import datetime

from pydantic import Field, computed_field, field_validator

from scoutbase.core.client import resolve_asset_url
from scoutbase.core.response.base_model import CustomBaseModel


class BadgePublic(CustomBaseModel):
    id: int
    name: str
    category: str | None = Field(None)
    description: str | None = Field(None)
    difficulty_level: int = Field(1)
    image_url: str | None = Field(None)
    requirements: list[str] = Field([])
    activities: list[str] = Field([])
    created_at: datetime | None = Field(None)

    @computed_field
    @property
    def image_src(self) -> str | None:
        return resolve_asset_url(self.image_url)


class BadgeForm(CustomBaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: str = Field("")
    difficulty_level: int = Field(1, ge=1, le=5)
    requirements: list[str] = Field([])
    activities: list[str] = Field([])

    @field_validator("name", "category", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("requirements", "activities", mode="after")
    @classmethod
    def drop_blank_lines(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


class BadgeFilters(CustomBaseModel):
    search: str = Field("")
    category: str | None = Field(None)


class BadgeCatalog(CustomBaseModel):
    badges: list[BadgePublic] = Field([])
    categories: list[str] = Field([])
