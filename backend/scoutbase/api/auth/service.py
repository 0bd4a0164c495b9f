import logging

from scoutbase.api.auth.schemas import AuthResult, LoginRequest, RegisterRequest
from scoutbase.core.actions import perform
from scoutbase.core.auth.session import AuthState
from scoutbase.core.client import ApiClient
from scoutbase.response import ActionError, ApiError

logger = logging.getLogger(__name__)


async def login(client: ApiClient, credentials: LoginRequest) -> AuthResult:
    data = await perform(
        "logging in",
        client.post("/auth/login", json=credentials.model_dump(by_alias=True)),
        "Login failed",
    )
    return _store_session(client, data, "Login failed")


async def register(client: ApiClient, details: RegisterRequest) -> AuthResult:
    data = await perform(
        "registering account",
        client.post("/auth/register", json=details.model_dump(by_alias=True)),
        "Registration failed",
    )
    return _store_session(client, data, "Registration failed")


def _store_session(client: ApiClient, data: dict, fallback: str) -> AuthResult:
    if not data.get("token"):
        raise ActionError(data.get("message") or fallback)
    result = AuthResult.model_validate(data)
    client.session.set_session(
        result.token,
        result.user.model_dump(by_alias=True, mode="json") if result.user else None,
    )
    return result


def logout(client: ApiClient) -> None:
    client.session.clear()


async def refresh_user(client: ApiClient) -> AuthState:
    """
    Confirm the session with the portal ("who am I").

    The session reports ``pending`` while the check is outstanding so that
    guarded pages show a placeholder instead of redirecting. A 401/403
    ends the session; any other failure keeps it and is re-raised.
    """
    session = client.session
    if not session.is_authenticated():
        return session.state()

    session.begin_check()
    error = None
    try:
        data = await client.get("/auth/user")
    except ApiError as exc:
        error = exc
    finally:
        session.end_check()

    if error is None:
        session.set_user(data.get("user"))
        return session.state()

    logger.error(f"Error fetching current user: {error.status_code} {error.message}")
    if error.is_unauthorized:
        session.clear()
        return session.state()
    raise ActionError.from_api_error(
        error, "Failed to authenticate. Please login again."
    ) from error
