import logging

from pydantic import ValidationError

from scoutbase.api.helpers.schemas import (
    HelperDashboard,
    HelperEvent,
    HelperProfile,
    HelperRegistration,
)
from scoutbase.core.actions import perform
from scoutbase.core.client import ApiClient
from scoutbase.response import ActionError, ApiError, PreconditionError

logger = logging.getLogger(__name__)


async def get_profile(client: ApiClient, user_id: int | None = None) -> HelperProfile | None:
    """
    Helper profile of ``user_id`` (the signed-in user by default).

    A missing profile, whether the portal answers 404 or an empty body,
    is returned as None: that user still has to register as a helper.
    """
    user_id = user_id if user_id is not None else client.session.user_id()
    if user_id is None:
        return None
    try:
        data = await client.get(f"/helpers/user/{user_id}")
    except ApiError as exc:
        if exc.is_not_found:
            logger.info(f"No helper profile for user {user_id}")
            return None
        logger.error(f"Error fetching helper profile: {exc.status_code} {exc.message}")
        raise ActionError.from_api_error(
            exc, "Failed to load helper data. Please try again later."
        ) from exc
    helper = data.get("helper")
    if not helper:
        return None
    return HelperProfile.model_validate(helper)


async def register_helper(
    client: ApiClient, data: HelperRegistration | dict
) -> HelperProfile:
    if not isinstance(data, HelperRegistration):
        try:
            data = HelperRegistration.model_validate(data)
        except ValidationError:
            raise PreconditionError("Contact number is required")

    payload = data.model_dump(by_alias=True)
    user_id = client.session.user_id()
    if user_id is not None:
        payload["userId"] = user_id

    response = await perform(
        "registering as helper",
        client.post("/helpers/register", json=payload),
        "Failed to register as helper. Please try again.",
    )
    logger.info(f"Helper profile created for user {user_id}")
    if not response.get("helper"):
        raise ActionError("Failed to register as helper. Please try again.")
    return HelperProfile.model_validate(response["helper"])


async def list_helper_events(client: ApiClient, helper_id: int) -> list[HelperEvent]:
    data = await perform(
        "fetching helper events",
        client.get(f"/events/helpers/{helper_id}"),
        "Failed to load helper events. Please try again later.",
    )
    return [HelperEvent.model_validate(event) for event in data.get("events") or []]


async def load_dashboard(client: ApiClient) -> HelperDashboard:
    profile = await get_profile(client)
    if profile is None:
        return HelperDashboard(needs_registration=True)
    events = await list_helper_events(client, profile.id)
    return HelperDashboard(profile=profile, events=events)


async def volunteered_event_ids(client: ApiClient) -> set[int]:
    """Ids of events the signed-in helper is on; empty without a profile."""
    dashboard = await load_dashboard(client)
    return {event.id for event in dashboard.events}
