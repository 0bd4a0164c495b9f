import enum
from datetime import date, datetime

from pydantic import Field, field_validator

from scoutbase.api.badges.schemas import BadgePublic
from scoutbase.api.events.registration.schemas import RegistrationPanel
from scoutbase.core.response.base_model import (
    CustomBaseModel,
    OptionalPortalDate,
    PortalDate,
)


class EventTypes(str, enum.Enum):
    meeting = "Meeting"
    outing = "Outing"
    camp = "Camp"
    training = "Training"
    other = "Other"


class ParticipantStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class EventParticipant(CustomBaseModel):
    id: int | None = Field(None)
    user_id: int
    username: str | None = Field(None)
    first_name: str | None = Field(None)
    last_name: str | None = Field(None)
    email: str | None = Field(None)
    status: ParticipantStatus = Field(ParticipantStatus.pending)
    notes: str | None = Field(None)


class EventHelper(CustomBaseModel):
    id: int
    user_id: int | None = Field(None)
    username: str | None = Field(None)
    first_name: str | None = Field(None)
    last_name: str | None = Field(None)
    email: str | None = Field(None)
    confirmed: bool = Field(False)


# Fields only staff may see on an event.
LEADER_ONLY_FIELDS = ("notes", "equipment")


class EventBase(CustomBaseModel):
    title: str
    description: str | None = Field(None)
    event_type: EventTypes = Field(EventTypes.meeting)
    start_date: PortalDate
    end_date: OptionalPortalDate = Field(None)
    start_time: str | None = Field(None)
    end_time: str | None = Field(None)
    location_name: str | None = Field(None)
    location_address: str | None = Field(None)
    latitude: float | None = Field(None)
    longitude: float | None = Field(None)
    required_helpers: int = Field(0, ge=0)
    max_participants: int = Field(0, ge=0)
    cost: float | None = Field(None)
    notes: str | None = Field(None)
    equipment: str | None = Field(None)
    public_visible: bool = Field(True)
    leaders_only_visible: bool = Field(False)
    helpers_only_visible: bool = Field(False)

    @field_validator("latitude", "longitude", "cost", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        # form payloads send "" for untouched numeric inputs
        return None if value == "" else value

    @field_validator("required_helpers", "max_participants", mode="before")
    @classmethod
    def blank_as_zero(cls, value):
        return 0 if value in ("", None) else value


class EventPublic(EventBase):
    id: int
    participant_count: int | None = Field(None)
    created_at: datetime | None = Field(None)
    badges: list[BadgePublic] = Field([])
    participants: list[EventParticipant] = Field([])
    helpers: list[EventHelper] = Field([])

    @property
    def registered_count(self) -> int:
        if self.participant_count is not None:
            return self.participant_count
        return sum(
            1 for p in self.participants if p.status != ParticipantStatus.cancelled
        )

    @property
    def is_full(self) -> bool:
        return self.max_participants > 0 and self.registered_count >= self.max_participants

    @property
    def helpers_needed(self) -> int:
        return max(self.required_helpers - len(self.helpers), 0)

    def is_past(self, today: date | None = None) -> bool:
        return self.start_date < (today or date.today())

    def helper_ids(self) -> set[int]:
        return {helper.id for helper in self.helpers}

    def without_leader_fields(self) -> "EventPublic":
        return self.model_copy(update={field: None for field in LEADER_ONLY_FIELDS})


class EventCreate(EventBase):
    title: str = Field(..., min_length=1)
    location_name: str = Field(..., min_length=1)
    badge_ids: list[int] = Field([])

    @field_validator("title", "location_name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class EventFilters(CustomBaseModel):
    upcoming: bool = Field(True)
    past: bool = Field(False)
    event_type: EventTypes | None = Field(None)
    start_date: OptionalPortalDate = Field(None)
    end_date: OptionalPortalDate = Field(None)

    @field_validator("event_type", mode="before")
    @classmethod
    def blank_type(cls, value):
        return value or None

    def to_params(self, user_role: str | None = None) -> dict:
        params = {
            "upcoming": str(self.upcoming).lower(),
            "past": str(self.past).lower(),
            "eventType": self.event_type.value if self.event_type else None,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "userRole": user_role,
        }
        return {key: value for key, value in params.items() if value is not None}


class VolunteerState(CustomBaseModel):
    can_volunteer: bool
    is_volunteered: bool = Field(False)
    needs_registration: bool = Field(False)
    helper_id: int | None = Field(None)


class EventDetail(CustomBaseModel):
    event: EventPublic
    registration: RegistrationPanel
    volunteer: VolunteerState


class EventListItem(EventPublic):
    """An event in the listing; ``is_volunteered`` is only set for helpers."""

    is_volunteered: bool | None = Field(None)
