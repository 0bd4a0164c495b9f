from fastapi import APIRouter

from scoutbase.api.auth import service
from scoutbase.api.auth.schemas import (
    AuthResult,
    LoginRequest,
    RegisterRequest,
    SessionState,
)
from scoutbase.core.auth.roles import can_use_helper_dashboard, is_staff
from scoutbase.core.auth.session import AuthState
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/auth")


def session_state(state: AuthState) -> SessionState:
    return SessionState(
        is_authenticated=state.is_authenticated,
        role=state.role,
        user=state.user,
        pending=state.pending,
        is_staff=is_staff(state.role),
        can_use_helper_dashboard=can_use_helper_dashboard(state.role),
    )


@router.get("/session", summary="Who am I")
async def get_session(client: ClientDep) -> SessionState:
    return session_state(await service.refresh_user(client))


@router.post("/login", summary="Log in through the portal")
async def login(client: ClientDep, credentials: LoginRequest) -> AuthResult:
    return await service.login(client, credentials)


@router.post("/register", summary="Create a portal account")
async def register(client: ClientDep, details: RegisterRequest) -> AuthResult:
    return await service.register(client, details)


@router.post("/logout", summary="Forget the session")
async def logout(client: ClientDep) -> SessionState:
    service.logout(client)
    return session_state(client.session.state())
