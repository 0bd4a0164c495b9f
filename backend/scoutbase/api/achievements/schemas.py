from datetime import datetime

from pydantic import Field

from scoutbase.api.badges.schemas import BadgePublic
from scoutbase.api.users.schemas import UserPublic
from scoutbase.core.response.base_model import CustomBaseModel


class AchievementPublic(BadgePublic):
    """A badge as it appears on a member's record."""

    achievement_id: int | None = Field(None)
    awarded_date: datetime | None = Field(None)
    awarded_by: int | str | None = Field(None)
    notes: str | None = Field(None)


class AwardRequest(CustomBaseModel):
    user_id: int | str | None = Field(None)
    badge_id: int | str | None = Field(None)
    notes: str = Field("")


class AwardForm(CustomBaseModel):
    users: list[UserPublic] = Field([])
    badges: list[BadgePublic] = Field([])
    message: str | None = Field(None)


class UserAchievements(CustomBaseModel):
    user_id: int
    badges: list[AchievementPublic] = Field([])


class CategoryCount(CustomBaseModel):
    category: str | None = Field(None)
    count: int = Field(0)


class BadgeCount(CustomBaseModel):
    badge_id: int
    name: str
    category: str | None = Field(None)
    count: int = Field(0)


class MemberCount(CustomBaseModel):
    user_id: int
    username: str = Field("")
    first_name: str | None = Field(None)
    last_name: str | None = Field(None)
    count: int = Field(0)


class RecentAchievement(CustomBaseModel):
    id: int
    user_id: int
    badge_id: int
    awarded_by: int | str | None = Field(None)
    awarded_date: datetime | None = Field(None)
    notes: str | None = Field(None)
    badge: BadgePublic | None = Field(None)
    user: UserPublic | None = Field(None)


class AchievementStatistics(CustomBaseModel):
    total_count: int = Field(0)
    category_counts: list[CategoryCount] = Field([])
    top_badges: list[BadgeCount] = Field([])
    top_users: list[MemberCount] = Field([])
    recent: list[RecentAchievement] = Field([])
