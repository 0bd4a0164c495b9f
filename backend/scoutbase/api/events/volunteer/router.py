from fastapi import APIRouter

from scoutbase.api.events import service as event_service
from scoutbase.api.events.schemas import VolunteerState
from scoutbase.api.events.volunteer import service
from scoutbase.api.events.volunteer.schemas import (
    HelperAssign,
    HelperConfirm,
    HelperRoster,
)
from scoutbase.core.auth.dependencies import HelperAuth, StaffAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/{event_id}")


@router.post("/volunteer", summary="Volunteer as a helper for an event")
async def volunteer(client: ClientDep, user: HelperAuth, event_id: int) -> VolunteerState:
    event = await event_service.get_event(client, event_id)
    return await service.volunteer(client, event)


@router.get("/helpers", summary="Helpers assigned to an event and helpers available")
async def get_roster(client: ClientDep, user: StaffAuth, event_id: int) -> HelperRoster:
    return await service.helper_roster(client, event_id)


@router.post("/helpers", summary="Assign a helper to an event")
async def assign_helper(
    client: ClientDep, user: StaffAuth, event_id: int, assignment: HelperAssign
) -> HelperRoster:
    event = await service.assign_helper(
        client, event_id, assignment.helper_id, assignment.confirmed
    )
    return await service.build_roster(client, event)


@router.put("/helpers/{helper_id}", summary="Confirm or unconfirm an assigned helper")
async def confirm_helper(
    client: ClientDep,
    user: StaffAuth,
    event_id: int,
    helper_id: int,
    confirmation: HelperConfirm,
) -> HelperRoster:
    event = await service.confirm_helper(
        client, event_id, helper_id, confirmation.confirmed
    )
    return await service.build_roster(client, event)


@router.delete("/helpers/{helper_id}", summary="Remove a helper from an event")
async def remove_helper(
    client: ClientDep, user: StaffAuth, event_id: int, helper_id: int
) -> HelperRoster:
    event = await service.remove_helper(client, event_id, helper_id)
    return await service.build_roster(client, event)
