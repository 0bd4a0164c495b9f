import logging

from scoutbase.api.events.schemas import EventPublic, VolunteerState
from scoutbase.api.events.service import get_event
from scoutbase.api.events.volunteer.schemas import (
    AvailableHelper,
    HelperAssign,
    HelperConfirm,
    HelperRoster,
)
from scoutbase.api.helpers.service import get_profile
from scoutbase.core.actions import perform
from scoutbase.core.auth.roles import can_use_helper_dashboard
from scoutbase.core.client import ApiClient
from scoutbase.response import PreconditionError

logger = logging.getLogger(__name__)

NO_SCHEDULE_MESSAGE = (
    "Set a start date and start time for this event before assigning helpers"
)


async def volunteer_state(client: ApiClient, event: EventPublic) -> VolunteerState:
    """What the volunteer panel offers the signed-in viewer for ``event``."""
    if not client.session.is_authenticated() or not can_use_helper_dashboard(
        client.session.role()
    ):
        return VolunteerState(can_volunteer=False)

    profile = await get_profile(client)
    if profile is None:
        return VolunteerState(can_volunteer=False, needs_registration=True)

    is_volunteered = profile.id in event.helper_ids()
    return VolunteerState(
        can_volunteer=not is_volunteered,
        is_volunteered=is_volunteered,
        helper_id=profile.id,
    )


async def volunteer(client: ApiClient, event: EventPublic) -> VolunteerState:
    """
    Offer the signed-in helper for ``event``.

    There is no way back from here for the helper; only staff can take a
    helper off an event again.
    """
    if not client.session.is_authenticated() or not can_use_helper_dashboard(
        client.session.role()
    ):
        raise PreconditionError("You must be logged in as a helper to volunteer")
    state = await volunteer_state(client, event)
    if state.needs_registration or state.is_volunteered:
        return state

    await perform(
        "volunteering for event",
        client.post(f"/events/{event.id}/volunteer"),
        "Failed to volunteer for event",
    )
    logger.info(f"Helper {state.helper_id} volunteered for event {event.id}")
    return VolunteerState(
        can_volunteer=False, is_volunteered=True, helper_id=state.helper_id
    )


async def available_helpers(
    client: ApiClient, event: EventPublic
) -> list[AvailableHelper]:
    """
    Helpers free during the event's time slot and not already on it.

    Schedule filtering happens on the portal; an event without a start
    date or time cannot be matched against schedules at all.
    """
    if not event.start_date or not event.start_time:
        raise PreconditionError(NO_SCHEDULE_MESSAGE)
    data = await perform(
        "fetching available helpers",
        client.get(
            f"/events/{event.id}/available-helpers",
            params={
                "eventDate": event.start_date.isoformat(),
                "startTime": event.start_time,
                "endTime": event.end_time or event.start_time,
            },
        ),
        "Failed to load event data. Please try again later.",
    )
    assigned = event.helper_ids()
    return [
        AvailableHelper.model_validate(helper)
        for helper in data.get("helpers") or []
        if helper.get("id") not in assigned
    ]


async def helper_roster(client: ApiClient, event_id: int) -> HelperRoster:
    return await build_roster(client, await get_event(client, event_id))


async def build_roster(client: ApiClient, event: EventPublic) -> HelperRoster:
    """Assigned helpers plus the picker; the picker stays off without a schedule."""
    roster = HelperRoster(
        event_id=event.id,
        title=event.title,
        required_helpers=event.required_helpers,
        helpers_needed=event.helpers_needed,
        assigned=event.helpers,
    )
    if not event.start_date or not event.start_time:
        roster.picker_enabled = False
        roster.picker_message = NO_SCHEDULE_MESSAGE
        return roster
    roster.available = await available_helpers(client, event)
    return roster


async def assign_helper(
    client: ApiClient, event_id: int, helper_id: int, confirmed: bool = False
) -> EventPublic:
    assignment = HelperAssign(helper_id=helper_id, confirmed=confirmed)
    await perform(
        "assigning helper",
        client.post(
            "/events/helpers",
            json={"eventId": event_id, **assignment.model_dump(by_alias=True)},
        ),
        "Failed to assign helper",
    )
    logger.info(f"Helper {helper_id} assigned to event {event_id}")
    return await get_event(client, event_id)


async def confirm_helper(
    client: ApiClient, event_id: int, helper_id: int, confirmed: bool
) -> EventPublic:
    await perform(
        "updating helper confirmation",
        client.put(
            f"/events/{event_id}/helpers/{helper_id}",
            json=HelperConfirm(confirmed=confirmed).model_dump(by_alias=True),
        ),
        "Failed to update helper confirmation",
    )
    logger.info(
        f"Helper {helper_id} {'confirmed' if confirmed else 'unconfirmed'} for event {event_id}"
    )
    return await get_event(client, event_id)


async def remove_helper(client: ApiClient, event_id: int, helper_id: int) -> EventPublic:
    await perform(
        "removing helper",
        client.delete(f"/events/{event_id}/helpers/{helper_id}"),
        "Failed to remove helper",
    )
    logger.info(f"Helper {helper_id} removed from event {event_id}")
    return await get_event(client, event_id)
