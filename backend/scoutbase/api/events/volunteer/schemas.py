from pydantic import Field

from scoutbase.api.events.schemas import EventHelper
from scoutbase.core.response.base_model import CustomBaseModel


class AvailableHelper(CustomBaseModel):
    id: int
    user_id: int | None = Field(None)
    first_name: str | None = Field(None)
    last_name: str | None = Field(None)
    email: str | None = Field(None)


class HelperRoster(CustomBaseModel):
    event_id: int
    title: str
    required_helpers: int
    helpers_needed: int
    assigned: list[EventHelper] = Field([])
    available: list[AvailableHelper] = Field([])
    picker_enabled: bool = Field(True)
    picker_message: str | None = Field(None)


class HelperAssign(CustomBaseModel):
    helper_id: int
    confirmed: bool = Field(False)


class HelperConfirm(CustomBaseModel):
    confirmed: bool
