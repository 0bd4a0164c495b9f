from pydantic import Field

from scoutbase.api.events.schemas import EventPublic
from scoutbase.core.response.base_model import CustomBaseModel


class HelperProfile(CustomBaseModel):
    id: int
    user_id: int
    disclosure_status: bool = Field(False)
    training_completed: bool = Field(False)
    contact_number: str | None = Field(None)
    skills: str | None = Field(None)


class HelperRegistration(CustomBaseModel):
    contact_number: str = Field(..., min_length=1)
    street_address: str = Field("")
    city: str = Field("")
    postcode: str = Field("")
    skills: str = Field("")
    notes: str = Field("")


class HelperEvent(EventPublic):
    confirmed: bool = Field(False)


class HelperDashboard(CustomBaseModel):
    needs_registration: bool = Field(False)
    profile: HelperProfile | None = Field(None)
    events: list[HelperEvent] = Field([])
