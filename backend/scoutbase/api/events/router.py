import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter

from scoutbase.api.events import service
from scoutbase.api.events.attendance.router import router as attendance_router
from scoutbase.api.events.registration import service as registration_service
from scoutbase.api.events.registration.router import router as registration_router
from scoutbase.api.events.schemas import (
    EventCreate,
    EventDetail,
    EventFilters,
    EventListItem,
    EventPublic,
    EventTypes,
)
from scoutbase.api.events.volunteer import service as volunteer_service
from scoutbase.api.events.volunteer.router import router as volunteer_router
from scoutbase.api.helpers import service as helpers_service
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import OptionalAuth, StaffAuth
from scoutbase.core.auth.roles import can_use_helper_dashboard
from scoutbase.core.portal import ClientDep
from scoutbase.response import ActionError, CustomHTTPException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events")


@router.get("", summary="List events visible to the viewer")
async def list_events(
    client: ClientDep,
    viewer: OptionalAuth,
    upcoming: bool = True,
    past: bool = False,
    event_type: Optional[EventTypes] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[EventListItem]:
    filters = EventFilters(
        upcoming=upcoming,
        past=past,
        event_type=event_type,
        start_date=start_date,
        end_date=end_date,
    )
    events = await service.list_events(client, filters)
    role = viewer.role if viewer else None

    volunteered = None
    if viewer and can_use_helper_dashboard(role):
        try:
            volunteered = await helpers_service.volunteered_event_ids(client)
        except ActionError as exc:
            logger.warning(f"Could not mark volunteered events: {exc.message}")
            volunteered = set()

    return [
        EventListItem.model_validate(
            {
                **dict(service.for_viewer(event, role)),
                "is_volunteered": None if volunteered is None else event.id in volunteered,
            }
        )
        for event in events
        if service.can_view_event(event, role)
    ]


@router.get("/types", summary="Event types in use")
async def list_event_types(client: ClientDep) -> List[str]:
    return await service.list_event_types(client)


@router.get("/statistics", summary="Event statistics for the admin dashboard")
async def get_statistics(client: ClientDep, user: StaffAuth) -> dict:
    return await service.get_statistics(client)


@router.get("/{event_id}", summary="Event page with registration and volunteer panels")
async def get_event(client: ClientDep, viewer: OptionalAuth, event_id: int) -> EventDetail:
    event = await service.get_event(client, event_id)
    role = viewer.role if viewer else None
    if not service.can_view_event(event, role):
        raise CustomHTTPException(404, "Event not found")

    authenticated = viewer is not None
    registered = await registration_service.is_registered(client, event_id)
    return EventDetail(
        event=service.for_viewer(event, role),
        registration=registration_service.registration_panel(
            event, authenticated, registered
        ),
        volunteer=await volunteer_service.volunteer_state(client, event),
    )


@router.post("", summary="Create an event")
async def create_event(
    client: ClientDep, user: StaffAuth, event: EventCreate
) -> List[EventPublic]:
    return await service.create_event(client, event)


@router.put("/{event_id}", summary="Update an event")
async def update_event(
    client: ClientDep, user: StaffAuth, event_id: int, event: EventCreate
) -> List[EventPublic]:
    return await service.update_event(client, event_id, event)


@router.delete("/{event_id}", summary="Delete an event")
async def delete_event(
    client: ClientDep, user: StaffAuth, event_id: int, confirmed: bool = False
) -> List[EventPublic]:
    return await service.delete_event(
        client, event_id, require_confirmation(confirmed)
    )


router.include_router(registration_router)
router.include_router(volunteer_router)
router.include_router(attendance_router)
