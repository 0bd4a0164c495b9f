import logging

from pydantic import ValidationError

from scoutbase.api.events.schemas import (
    EventCreate,
    EventFilters,
    EventPublic,
)
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.auth.roles import Role, coerce_role, is_staff
from scoutbase.core.client import ApiClient
from scoutbase.core.fetching import LatestRequest
from scoutbase.response import ActionError, PreconditionError

logger = logging.getLogger(__name__)

DELETE_EVENT_PROMPT = "Are you sure you want to delete this event?"


def can_view_event(event: EventPublic, role: Role | str | None) -> bool:
    """Visibility flags as the portal applies them; anonymous viewers count as public."""
    role = coerce_role(role) or Role.public
    if event.leaders_only_visible and not is_staff(role):
        return False
    if role == Role.public:
        return event.public_visible
    if role == Role.helper:
        return event.public_visible or event.helpers_only_visible
    return True


def for_viewer(event: EventPublic, role: Role | str | None) -> EventPublic:
    if is_staff(role):
        return event
    return event.without_leader_fields()


async def list_events(
    client: ApiClient, filters: EventFilters | None = None
) -> list[EventPublic]:
    filters = filters or EventFilters()
    role = client.session.role()
    data = await perform(
        "fetching events",
        client.get("/events", params=filters.to_params(role.value if role else None)),
        "Failed to load events. Please try again later.",
    )
    events = data.get("events") or data.get("data") or []
    return [for_viewer(EventPublic.model_validate(event), role) for event in events]


async def get_event(client: ApiClient, event_id: int) -> EventPublic:
    data = await perform(
        "fetching event details",
        client.get(f"/events/{event_id}"),
        "Failed to load event details. Please try again later.",
    )
    return EventPublic.model_validate(data["event"])


async def list_event_types(client: ApiClient) -> list[str]:
    """Distinct event types across the unfiltered listing, in first-seen order."""
    data = await perform(
        "fetching event types",
        client.get("/events"),
        "Failed to load event types",
    )
    types = []
    for event in data.get("events") or []:
        event_type = event.get("eventType")
        if event_type and event_type not in types:
            types.append(event_type)
    return types


def validate_event(data: EventCreate | dict) -> EventCreate:
    if isinstance(data, EventCreate):
        return data
    try:
        return EventCreate.model_validate(data)
    except ValidationError as exc:
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        raise PreconditionError("Please fill in all required fields", errors=errors)


async def create_event(client: ApiClient, data: EventCreate | dict) -> list[EventPublic]:
    event = validate_event(data)
    await perform(
        "creating event",
        client.post("/events", json=event.model_dump(by_alias=True, mode="json")),
        "Failed to save event. Please try again.",
    )
    logger.info(f"Event '{event.title}' created")
    return await list_events(client)


async def update_event(
    client: ApiClient, event_id: int, data: EventCreate | dict
) -> list[EventPublic]:
    event = validate_event(data)
    await perform(
        "updating event",
        client.put(f"/events/{event_id}", json=event.model_dump(by_alias=True, mode="json")),
        "Failed to save event. Please try again.",
    )
    logger.info(f"Event {event_id} updated")
    return await list_events(client)


async def delete_event(
    client: ApiClient, event_id: int, confirm: Confirm
) -> list[EventPublic] | None:
    """Delete an event and return the refreshed listing, or None if not confirmed."""
    if not await ask(confirm, DELETE_EVENT_PROMPT):
        return None
    await perform(
        "deleting event",
        client.delete(f"/events/{event_id}"),
        "Failed to delete event. Please try again.",
    )
    logger.info(f"Event {event_id} deleted")
    return await list_events(client)


async def get_statistics(client: ApiClient) -> dict:
    data = await perform(
        "fetching event statistics",
        client.get("/events/statistics"),
        "Failed to load statistics. Please try again later.",
    )
    return data.get("stats") or {}


class EventListing:
    """
    Event list of the events page.

    Each filter change issues a new fetch and cancels the one in flight,
    so a slow response to an older filter never overwrites a newer one.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.filters = EventFilters()
        self.events: list[EventPublic] = []
        self.error: str | None = None
        self._request: LatestRequest[list[EventPublic]] = LatestRequest("events")

    @property
    def loading(self) -> bool:
        return self._request.in_flight

    def _set_events(self, events: list[EventPublic]) -> None:
        self.events = events
        self.error = None

    async def refresh(self) -> bool:
        filters = self.filters
        try:
            return await self._request.apply(
                lambda: list_events(self.client, filters), self._set_events
            )
        except ActionError as exc:
            self.error = exc.message
            return False

    async def apply_filters(self, filters: EventFilters) -> bool:
        self.filters = filters
        return await self.refresh()

    def close(self) -> None:
        self._request.cancel()
