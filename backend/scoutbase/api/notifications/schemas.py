import enum
from datetime import datetime

from pydantic import Field, computed_field

from scoutbase.core.response.base_model import CustomBaseModel


class NotificationTypes(str, enum.Enum):
    message = "message"
    announcement = "announcement"
    event = "event"
    badge = "badge"
    group_conversation = "group_conversation"


# page a notification of each type links to
LINK_PREFIXES = {
    NotificationTypes.message: "/messages",
    NotificationTypes.announcement: "/announcements",
    NotificationTypes.event: "/events",
    NotificationTypes.badge: "/badges",
    NotificationTypes.group_conversation: "/group-conversations",
}


class NotificationPublic(CustomBaseModel):
    id: int
    user_id: int | None = Field(None)
    title: str = Field("")
    message: str = Field("")
    type: str | None = Field(None)
    related_id: int | None = Field(None)
    is_read: bool = Field(False)
    created_at: datetime | None = Field(None)
    read_at: datetime | None = Field(None)

    @computed_field
    @property
    def link(self) -> str | None:
        try:
            prefix = LINK_PREFIXES[NotificationTypes(self.type)]
        except ValueError:
            return None
        if self.related_id is None:
            return None
        return f"{prefix}/{self.related_id}"


class NotificationInbox(CustomBaseModel):
    notifications: list[NotificationPublic] = Field([])
    unread_count: int = Field(0)


class UnreadCount(CustomBaseModel):
    count: int = Field(0)
