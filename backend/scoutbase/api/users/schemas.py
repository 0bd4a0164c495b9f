from datetime import datetime

from pydantic import Field

from scoutbase.core.auth.roles import Role
from scoutbase.core.response.base_model import CustomBaseModel


class UserPublic(CustomBaseModel):
    id: int | str | None = Field(None)
    username: str = Field("")
    email: str = Field("")
    first_name: str | None = Field(None)
    last_name: str | None = Field(None)
    role: Role = Field(Role.public)
    created_at: datetime | None = Field(None)
    last_login: datetime | None = Field(None)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class UserRoleUpdate(CustomBaseModel):
    user_id: int
    role: Role


class UserFilters(CustomBaseModel):
    search: str = Field("")
    role: Role | None = Field(None)
