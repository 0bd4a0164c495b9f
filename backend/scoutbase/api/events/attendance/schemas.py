import enum
from datetime import datetime

from pydantic import Field, computed_field

from scoutbase.core.response.base_model import CustomBaseModel


class AttendanceStatus(str, enum.Enum):
    not_checked_in = "not_checked_in"
    checked_in = "checked_in"
    completed = "completed"


class AttendanceActions(str, enum.Enum):
    check_in = "check_in"
    check_out = "check_out"


class AttendanceRecord(CustomBaseModel):
    id: int | None = Field(None)
    event_id: int | None = Field(None)
    user_id: int
    check_in_time: datetime | None = Field(None)
    check_out_time: datetime | None = Field(None)
    notes: str | None = Field(None)


class AttendanceRow(CustomBaseModel):
    user_id: int
    name: str
    status: AttendanceStatus
    actions: list[AttendanceActions] = Field([])
    check_in_time: datetime | None = Field(None)
    check_out_time: datetime | None = Field(None)


class AttendanceSheet(CustomBaseModel):
    event_id: int
    title: str
    rows: list[AttendanceRow] = Field([])

    @computed_field
    @property
    def registered_count(self) -> int:
        return len(self.rows)

    @computed_field
    @property
    def checked_in_count(self) -> int:
        # checked out members were checked in too
        return sum(1 for row in self.rows if row.status != AttendanceStatus.not_checked_in)

    @computed_field
    @property
    def no_show_count(self) -> int:
        return self.registered_count - self.checked_in_count


class AttendanceAction(CustomBaseModel):
    user_id: int
