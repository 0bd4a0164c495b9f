import enum
from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from scoutbase.core.response.base_model import CustomBaseModel, OptionalPortalDate


class AnnouncementPriority(str, enum.Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"


class TargetRoles(str, enum.Enum):
    all = "all"
    leader = "leader"
    helper = "helper"
    public = "public"


ALL_CATEGORIES = "all"


class AnnouncementBase(CustomBaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    start_date: OptionalPortalDate = Field(None)
    end_date: OptionalPortalDate = Field(None)
    priority: AnnouncementPriority = Field(AnnouncementPriority.normal)
    target_role: TargetRoles = Field(TargetRoles.all)
    category: str = Field("general")
    is_pinned: bool = Field(False)

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, value):
        return value or "general"


class AnnouncementPublic(AnnouncementBase):
    id: int = Field(
        ..., validation_alias=AliasChoices("announcement_id", "announcementId", "id")
    )
    title: str
    content: str
    is_active: bool = Field(True)
    created_at: datetime
    created_by: int | None = Field(None)
    creator_name: str | None = Field(None)


class AnnouncementCreate(AnnouncementBase):
    pass


class AnnouncementUpdate(AnnouncementBase):
    is_active: bool = Field(True)
