from pydantic import Field

from scoutbase.api.users.schemas import UserPublic
from scoutbase.core.auth.roles import Role
from scoutbase.core.response.base_model import CustomBaseModel


class LoginRequest(CustomBaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(CustomBaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    first_name: str = Field("")
    last_name: str = Field("")


class AuthResult(CustomBaseModel):
    token: str
    user: UserPublic | None = Field(None)


class SessionState(CustomBaseModel):
    is_authenticated: bool
    role: Role | None = Field(None)
    user: UserPublic | None = Field(None)
    pending: bool = Field(False)
    is_staff: bool = Field(False)
    can_use_helper_dashboard: bool = Field(False)
