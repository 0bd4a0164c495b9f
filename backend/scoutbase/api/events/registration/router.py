from fastapi import APIRouter

from scoutbase.api.events import service as event_service
from scoutbase.api.events.registration import service
from scoutbase.api.events.registration.schemas import (
    RegistrationPanel,
    RegistrationRequest,
)
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import DependsAuth, OptionalAuth
from scoutbase.core.client import ApiClient
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/{event_id}/registration")


async def _panel(client: ApiClient, event_id: int) -> RegistrationPanel:
    event = await event_service.get_event(client, event_id)
    registered = await service.is_registered(client, event_id)
    return service.registration_panel(
        event, client.session.is_authenticated(), registered
    )


@router.get("", summary="Registration panel for the viewer")
async def get_registration(
    client: ClientDep, viewer: OptionalAuth, event_id: int
) -> RegistrationPanel:
    return await _panel(client, event_id)


@router.post("", summary="Register for an event")
async def register(
    client: ClientDep,
    user: DependsAuth,
    event_id: int,
    request: RegistrationRequest | None = None,
) -> RegistrationPanel:
    event = await event_service.get_event(client, event_id)
    await service.register(client, event, request.notes if request else "")
    return await _panel(client, event_id)


@router.delete("", summary="Cancel a registration")
async def cancel_registration(
    client: ClientDep, user: DependsAuth, event_id: int, confirmed: bool = False
) -> RegistrationPanel:
    await service.cancel_registration(
        client, event_id, require_confirmation(confirmed)
    )
    return await _panel(client, event_id)
