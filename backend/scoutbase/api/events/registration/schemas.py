import enum

from pydantic import Field

from scoutbase.core.response.base_model import CustomBaseModel


class RegistrationPanelState(str, enum.Enum):
    login_required = "login_required"
    past_event = "past_event"
    registered = "registered"
    full = "full"
    open = "open"


class RegistrationStatus(CustomBaseModel):
    is_registered: bool = Field(False)


class RegistrationPanel(CustomBaseModel):
    event_id: int
    state: RegistrationPanelState
    is_registered: bool = Field(False)
    max_participants: int = Field(0)
    registered_count: int = Field(0)


class RegistrationRequest(CustomBaseModel):
    notes: str = Field("")
